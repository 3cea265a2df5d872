from typing import Dict, List, Sequence

from .models import FieldDescriptor, RenderContext, humanize
from .type_mapping import to_ui_fragment_kind

ACTIONS_COLUMN = "Actions"

_HEADER_INDENT = " " * 40

_HIDDEN = '''
                <input type="hidden" id="{name}" name="{name}">'''

_SELECT = '''

                                <!-- {label} Field -->
                                <div class="form-group form-float">
                                    <label for="{name}">{label}</label>
                                    <div class="form-line">
                                        <select name="{name}" id="{name}" class="form-control">
                                            <!-- Add your options here -->
                                        </select>
                                    </div>
                                </div>'''

_TEXTAREA = '''

                                <!-- {label} Field -->
                                <div class="form-group form-float">
                                    <label for="{name}">{label}</label>
                                    <div class="form-line">
                                        <textarea rows="1" id="{name}" name="{name}" class="form-control no-resize auto-growth"
                                            placeholder="Enter {label}"></textarea>
                                    </div>
                                </div>'''

_CHECKBOX = '''

                                <!-- {label} Field -->
                                <div class="form-group">
                                    <input type="checkbox" id="{name}" name="{name}" class="filled-in chk-col-blue">
                                    <label for="{name}">{label}</label>
                                </div>'''

_INPUT = '''

                                <!-- {label} Field -->
                                <div class="form-group form-float">
                                    <label for="{name}">{label}</label>
                                    <div class="form-line">
                                        <input type="{type}" id="{name}" name="{name}" class="form-control"
                                            placeholder="Enter {label}">
                                    </div>
                                </div>'''


def make_title(page_name: str) -> str:
    return page_name.replace("_", " ").upper()


def column_labels(fields: Sequence[FieldDescriptor]) -> List[str]:
    return [field.label for field in fields] + [ACTIONS_COLUMN]


def table_headers(columns: Sequence[str]) -> str:
    return "".join(f"{_HEADER_INDENT}<th>{column}</th>\n" for column in columns)


def form_fragment(field: FieldDescriptor) -> str:
    kind = to_ui_fragment_kind(field.type)
    values = {"name": field.name, "label": field.label, "type": field.type}
    if kind == "hidden":
        return _HIDDEN.format(**values)
    if kind == "select":
        return _SELECT.format(**values)
    if kind == "textarea":
        return _TEXTAREA.format(**values)
    if kind == "checkbox":
        return _CHECKBOX.format(**values)
    return _INPUT.format(**values)


def render(page_name: str, fields: Sequence[FieldDescriptor]) -> RenderContext:
    columns = column_labels(fields)
    return RenderContext(
        page_name=page_name,
        title=make_title(page_name),
        page_info=humanize(page_name),
        columns=columns,
        table_headers=table_headers(columns),
        form_fields="".join(form_fragment(field) for field in fields),
    )


def substitute(template: str, replacements: Dict[str, str]) -> str:
    """Replace each known ``{{TOKEN}}``; anything else is left as written."""
    for token, value in replacements.items():
        template = template.replace(token, value)
    return template


def render_artifacts(context: RenderContext, templates: Dict[str, str]) -> Dict[str, str]:
    replacements = context.replacements()
    return {name: substitute(template, replacements) for name, template in templates.items()}
