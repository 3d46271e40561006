"""Exception hierarchy for defter.

Library code raises these; the CLI catches them at the top of each flow
and turns them into an ``Error:`` / ``Cause:`` message pair.
"""


class DefterError(Exception):
    """Base exception for defter operations."""


class ConfigError(DefterError):
    """Raised when the config file is missing or invalid."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file does not exist or cannot be read."""


class ConfigCorruptError(ConfigError):
    """Raised when the config file is not a JSON object."""


class ConfigIncompleteError(ConfigError):
    """Raised when a mandatory config field is missing or empty."""


class ConfigWriteError(DefterError):
    """Raised when the config file cannot be written."""


class DatabaseOpenError(DefterError):
    """Raised when the KDBX database cannot be opened."""


class DatabaseNotFoundError(DatabaseOpenError):
    """Raised when the database or key file does not exist."""


class AuthenticationError(DatabaseOpenError):
    """Raised when database credentials are invalid."""


class ArgumentMissingError(DefterError):
    """Raised when ``--init`` is missing one of its flags."""


class ClipboardError(DefterError):
    """Raised when the password cannot be copied to the clipboard."""
