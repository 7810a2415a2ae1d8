"""Error types reported by the linter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ErrorKind(Enum):
    """The kinds of problem the linter can report."""

    UNEXPECTED_TOKEN = auto()
    END_OF_FILE = auto()
    CUSTOM = auto()
    UNKNOWN_PROPERTY = auto()
    IO_ERROR = auto()
    JSON_ERROR = auto()
    UNKNOWN_VALUE = auto()
    DUPLICATE_PROPERTY = auto()
    NO_UNIT_FOUND = auto()
    WRONG_UNIT_DECLARED = auto()
    PROPERTY_OVERRIDE = auto()
    INVALID_DECLARATION = auto()


_TEMPLATES = {
    ErrorKind.UNEXPECTED_TOKEN: "Unexpected token: {}",
    ErrorKind.END_OF_FILE: "Unexpected end of file",
    ErrorKind.CUSTOM: "Parse error: {}",
    ErrorKind.UNKNOWN_PROPERTY: "file error: {}",
    ErrorKind.IO_ERROR: "file error: {}",
    ErrorKind.JSON_ERROR: "json error: {}",
    ErrorKind.UNKNOWN_VALUE: "file error: {}",
    ErrorKind.DUPLICATE_PROPERTY: "file error",
    ErrorKind.NO_UNIT_FOUND: "no units have been declared",
    ErrorKind.WRONG_UNIT_DECLARED: "wrong unit has been declared",
    ErrorKind.PROPERTY_OVERRIDE: "propery overridden ",
    ErrorKind.INVALID_DECLARATION: "invalid declaration",
}


class PrettystrictError(Exception):
    """A categorised linter error with an optional detail string."""

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(_TEMPLATES[kind].format(detail))


@dataclass(eq=False)
class LintError(Exception):
    """A problem found in a rule, tied to a selector and property."""

    selector: str
    property: str
    message: str
    kind: PrettystrictError

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_error(cls, err: PrettystrictError) -> "LintError":
        """Wrap a bare error with no selector or property attached."""
        return cls(selector="", property="", message=str(err), kind=err)