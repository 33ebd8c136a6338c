"""Standardized CLI exit codes for phpconcepts.

Exit code scheme:

    0  SUCCESS        -- command completed, every file extracted cleanly
    1  GENERAL_ERROR  -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR    -- invalid arguments, bad flags, bad configuration
    6  PARTIAL        -- command completed but some nodes or files failed
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_PARTIAL: int = 6

# ---------------------------------------------------------------------------
# Custom exceptions (caught by CLI error handler)
# ---------------------------------------------------------------------------


class ConceptsError(click.ClickException):
    """Base class for phpconcepts errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class ExtractionError(ConceptsError):
    """Raised when a syntax node is too malformed to interpret.

    Scoped to a single node: the traversal records it and moves on.
    """

    def __init__(self, message: str, file_path: str | None = None, node_kind: str | None = None):
        where = file_path or "<source>"
        if node_kind:
            where = f"{where} ({node_kind})"
        super().__init__(f"{where}: {message}", EXIT_ERROR)
        self.reason = message
        self.file_path = file_path
        self.node_kind = node_kind


class ConfigError(ConceptsError):
    """Raised when .phpconcepts.json is structurally invalid."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_USAGE)


class PartialResultError(ConceptsError):
    """Raised after output when some files or nodes failed extraction."""

    def __init__(self, failures: int):
        super().__init__(f"{failures} extraction error(s); results are partial", EXIT_PARTIAL)
        self.failures = failures
