"""Exception types raised by tagcount."""


class TagCountError(RuntimeError):
    """Base class for tagcount failures."""


class ResolutionError(TagCountError):
    """Raised when package resolution failed and produced no packages."""


class LocateError(TagCountError):
    """Raised when a resolved package has no directory on disk."""


class ConfigError(TagCountError):
    """Raised when the configuration file cannot be parsed."""
