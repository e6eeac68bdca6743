"""Core types and constants for oasdocs workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1

# Indent used for bundled JSON output
DEFAULT_INDENT = 2


class Command(str, Enum):
    """CLI subcommands.

    Using ``str, Enum`` so that ``Command.BUNDLE == "bundle"`` is True.
    """

    VALIDATE = "validate"
    BUNDLE = "bundle"
    UPLOAD = "upload"


@dataclass(frozen=True)
class ValidationError:
    """A single schema violation reported by the validator."""

    message: str
    location: Optional[str] = None  # JSON pointer inside the document


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one specification file; valid iff there are no errors."""

    path: str
    errors: tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @classmethod
    def from_errors(cls, path: str, errors) -> ValidationOutcome:
        return cls(path=path, errors=tuple(errors))


@dataclass(frozen=True)
class Diagnostic:
    """One block of console output; ``err`` routes it to stderr."""

    text: str
    err: bool = False


@dataclass
class Result:
    """Terminal state of a workflow: exit code plus everything to print."""

    exit_code: int = EXIT_OK
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def out(self, text: str) -> None:
        self.diagnostics.append(Diagnostic(text))

    def err(self, text: str) -> None:
        self.diagnostics.append(Diagnostic(text, err=True))

    def fail(self, text: str | None = None) -> Result:
        """Record an optional stderr line, set a failing exit code, return self."""
        if text is not None:
            self.err(text)
        self.exit_code = EXIT_FAILURE
        return self
