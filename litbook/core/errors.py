from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List


class LitbookError(Exception):
    """Base class for every error litbook reports to the user."""


@dataclass(frozen=True)
class Diagnostic:
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"


class ParseError(LitbookError):
    def __init__(self, diagnostics: Iterable[Diagnostic]):
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        super().__init__("\n".join(str(d) for d in self.diagnostics))


class StructuralError(LitbookError):
    pass


class ConfigError(LitbookError):
    pass


class FileAccessError(LitbookError):
    pass


class ProtocolError(LitbookError):
    pass


class ChapterError(LitbookError):
    def __init__(self, path: str, cause: LitbookError):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class BuildError(LitbookError):
    def __init__(self, errors: Iterable[Exception]):
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))
