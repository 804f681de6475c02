"""
Configuration errors.

Parsing problems never raise: a bad value silently becomes its default.
The only error callers can hit is reading the snapshot before it exists,
which is an ordering bug in the caller rather than bad input.
"""


class ConfigError(Exception):
    """Base class for configuration errors."""


class ConfigNotInitializedError(ConfigError, RuntimeError):
    """Raised when the snapshot is read before initialize() has run."""

    def __init__(self) -> None:
        super().__init__(
            "Configuration has not been loaded. Call initialize() at process start."
        )
