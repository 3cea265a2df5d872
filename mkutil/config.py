import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError
from .models import Layout

PACKAGE_STUBS_DIR = Path(__file__).parent / "stubs"


class Settings(BaseModel):
    """Locations and connection details for one generator run.

    Built once by the CLI and passed down; nothing reads the environment
    after this point.
    """

    model_config = ConfigDict(extra="forbid")

    stubs_dir: Path = Field(default=PACKAGE_STUBS_DIR)
    defaults_path: Optional[Path] = None
    output_dir: Path = Field(default=Path("modules"))
    layout: Layout = "controller"
    database_url: Optional[str] = None

    @property
    def resolved_defaults_path(self) -> Path:
        return self.defaults_path or (self.stubs_dir / "defaults.json")

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Read ``MKUTIL_*`` variables (a ``.env`` file is honoured) and apply
        non-``None`` *overrides* on top."""
        load_dotenv()
        values = {
            "stubs_dir": os.getenv("MKUTIL_STUBS_DIR"),
            "defaults_path": os.getenv("MKUTIL_DEFAULTS_PATH"),
            "output_dir": os.getenv("MKUTIL_OUTPUT_DIR"),
            "layout": os.getenv("MKUTIL_LAYOUT"),
            "database_url": os.getenv("MKUTIL_DATABASE_URL"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return cls(**{key: value for key, value in values.items() if value is not None})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid settings: {exc}") from exc
