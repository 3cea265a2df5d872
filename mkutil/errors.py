class MkutilError(Exception):
    """Base class for every failure the generator reports to the user."""


class UserInputError(MkutilError):
    pass


class ConfigurationError(MkutilError):
    pass


class OutputError(MkutilError):
    pass


class SchemaPreconditionError(MkutilError):
    def __init__(self, table_name: str, message: str, kind: str = "no_primary_key"):
        super().__init__(f"Cannot build schema for '{table_name}' ({kind}): {message}")
        self.table_name = table_name
        self.kind = kind


class NoPrimaryKey(SchemaPreconditionError):
    def __init__(self, table_name: str):
        super().__init__(
            table_name,
            "the first field must be of type 'hidden' to act as the primary key",
        )


class ExecutionError(MkutilError):
    def __init__(self, statement: str, cause: Exception):
        super().__init__(f"Schema statement failed: {cause}")
        self.statement = statement
        self.cause = cause
