"""Standardized CLI exit codes for sigtable.

Exit code scheme:

    0  SUCCESS              -- table generated (or check passed)
    1  GENERAL_ERROR        -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR          -- invalid arguments or scope configuration (Click default)
    3  SCOPE_UNRESOLVED     -- a configured scope could not be imported
    4  SERIALIZATION_ERROR  -- the output artifact could not be written
    5  STALE                -- `sigtable check` found the artifact out of date

A build pipeline can tell "the table needs regenerating" (5) apart from
"the generator is broken" (1, 3, 4).
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_SCOPE_UNRESOLVED: int = 3
EXIT_SERIALIZATION: int = 4
EXIT_STALE: int = 5

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments, flags or scope config)",
    EXIT_SCOPE_UNRESOLVED: "a scope could not be imported",
    EXIT_SERIALIZATION: "the output artifact could not be written",
    EXIT_STALE: "generated table is out of date -- run `sigtable generate`",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by the Click error handler)
# ---------------------------------------------------------------------------


class SigtableError(click.ClickException):
    """Base class for sigtable errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class ScopeResolutionError(SigtableError):
    """Raised when a named scope cannot be loaded. Aborts the whole run."""

    def __init__(self, path: str, reason: str = ""):
        message = f"cannot resolve scope {path!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, EXIT_SCOPE_UNRESOLVED)
        self.path = path


class SerializationError(SigtableError):
    """Raised when the generated artifact cannot be written."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_SERIALIZATION)


class ConfigError(SigtableError):
    """Raised when a scope configuration is malformed."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_USAGE)


class StaleTableError(SigtableError):
    """Raised by `sigtable check` when the artifact differs from a fresh run."""

    def __init__(self, message: str = "Generated table is stale. Run `sigtable generate`."):
        super().__init__(message, EXIT_STALE)

