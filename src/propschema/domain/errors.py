from __future__ import annotations

"""
Domain Exceptions.

Only structural failures are modelled as exceptions. A file without a
default export, a component without a props type or an empty property list
are reported as "no entry" and never raise.
"""


class PropSchemaError(Exception):
    """Base class for every fatal error raised by the extraction engine."""


class ConfigurationError(PropSchemaError):
    """Raised when the engine configuration cannot be honoured."""


class TsConfigError(ConfigurationError):
    """Raised when the TypeScript compiler configuration cannot be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load TypeScript config '{path}': {reason}")
        self.path = path
        self.reason = reason


class SourceDirectoryError(PropSchemaError):
    """Raised when the component source directory cannot be enumerated."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read source directory '{path}': {reason}")
        self.path = path
        self.reason = reason
