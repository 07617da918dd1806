"""Exceptions for scoped-config."""


class ConfigError(Exception):
    """Base exception for configuration errors.

    Attributes:
        kind: Short machine-readable error category
        scope: Scope value the error relates to, if known
        key: Offending top-level key, if any
    """

    kind = "config"

    def __init__(self, message: str, *, scope: str | None = None, key: str | None = None):
        super().__init__(message)
        self.scope = scope
        self.key = key


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    kind = "io"


class ConfigParseError(ConfigError):
    """Configuration file exists but does not hold a JSON object."""

    kind = "parse"

    def __init__(self, message: str, *, scope: str | None = None, path=None):
        super().__init__(message, scope=scope)
        self.path = path


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    kind = "validation"


class ConfigPathError(ConfigError):
    """Dotted path is empty or malformed."""

    kind = "path"
