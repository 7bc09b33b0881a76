"""Exceptions raised by the converters."""


class ParseError(ValueError):
    """A source document is missing a required field or cannot be parsed.

    Args:
        message: Human-readable description naming the offending field
        format: Source format being parsed
        field: Name of the missing or malformed field, when known
    """

    def __init__(self, message: str, format: str | None = None, field: str | None = None):
        super().__init__(message)
        self.format = format
        self.field = field


class UnsupportedFormatError(ValueError):
    """No parser or serializer is registered for a format."""

    def __init__(self, format: str, operation: str = "convert"):
        super().__init__(f"Unsupported format for {operation}: {format}")
        self.format = format
        self.operation = operation


class ConversionError(ValueError):
    """A conversion produced no output.

    Raised by batch runs with the ``abort`` policy; serializers themselves
    report failures as warnings.
    """

    def __init__(self, message: str, source: str | None = None, target: str | None = None):
        super().__init__(message)
        self.source = source
        self.target = target
