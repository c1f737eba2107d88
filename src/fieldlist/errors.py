"""
Exceptions raised at generation time.

All errors surface while the field list is being compiled.
Generated code contributes no runtime errors of its own.
"""

from typing import Optional, Tuple


class FieldListError(Exception):
    """Base class for every field-list generation failure."""
    pass


class FieldListSyntaxError(FieldListError):
    """
    Raised when an entry is not of the form ``(Type) name``.

    Properties:
        entry_index: zero-based index of the offending entry
        offset: character offset into ``source`` where the problem starts
        source: the full text that was being parsed (optional)
    """

    def __init__(
        self,
        message: str,
        entry_index: Optional[int] = None,
        offset: Optional[int] = None,
        source: Optional[str] = None,
    ) -> None:
        self.message = message
        self.entry_index = entry_index
        self.offset = offset
        self.source = source
        super().__init__(self.format_diagnostic())

    @property
    def line(self) -> Optional[int]:
        return self._position()[0]

    @property
    def column(self) -> Optional[int]:
        return self._position()[1]

    def _position(self) -> Tuple[Optional[int], Optional[int]]:
        if self.offset is None or self.source is None:
            return None, None
        before = self.source[: self.offset]
        line = before.count("\n") + 1
        column = self.offset - (before.rfind("\n") + 1) + 1
        return line, column

    def format_diagnostic(self) -> str:
        """Render the error as ``line:col: entry N: message`` plus a caret line."""
        prefix = ""
        if self.line is not None:
            prefix = f"{self.line}:{self.column}: "
        entry = f"entry {self.entry_index + 1}: " if self.entry_index is not None else ""
        text = f"{prefix}{entry}{self.message}"
        if self.line is None:
            return text
        lines = self.source.splitlines()
        source_line = lines[self.line - 1] if self.line <= len(lines) else ""
        caret = " " * (self.column - 1) + "^"
        return f"{text}\n    {source_line}\n    {caret}"


class FieldLimitError(FieldListError):
    """Raised when a field list holds more entries than the configured ceiling."""

    def __init__(self, limit: int, count: int) -> None:
        self.limit = limit
        self.count = count
        super().__init__(
            f"field list exceeds the maximum of {limit} fields (got at least {count}); "
            "split the declaration or raise max_fields"
        )


class DuplicateFieldError(FieldListError):
    """Raised for repeated field names when duplicate rejection is enabled."""

    def __init__(self, names) -> None:
        self.names = list(names)
        super().__init__(f"duplicate field names: {', '.join(self.names)}")


class SchemaError(FieldListError):
    """Raised when a YAML/JSON schema document is malformed."""
    pass


class ConfigError(FieldListError):
    """Raised when a generator configuration cannot be loaded."""
    pass
