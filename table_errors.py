class ConfigurationFault(ValueError):
    """Raised when the table is configured in a way it cannot render."""


class RenderFault(Exception):
    """A column render function failed while producing one row."""

    def __init__(self, index: int, column_key: str, error: BaseException):
        self.index = index
        self.column_key = column_key
        self.error = error
        super().__init__(
            f"row {index}, column {column_key!r}: {type(error).__name__}: {error}"
        )
