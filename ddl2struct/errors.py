class Ddl2StructError(Exception):
    """Base class for every error reported by ddl2struct."""
    pass


class InputError(Ddl2StructError):
    """SQL file (or config file) could not be read."""
    pass


class ParseError(Ddl2StructError):
    """Input text is not a single valid SQL statement."""
    pass


class SchemaError(Ddl2StructError):
    """CREATE TABLE statement without a column list."""
    pass


class UnsupportedStatement(Ddl2StructError):
    """Parsed statement is not a CREATE TABLE."""

    def __init__(self, kind: str):
        super().__init__(f"unsupported statement: {kind} (only CREATE TABLE is handled)")
        self.kind = kind
