"""Persistent credentials for the database defter opens.

The config is a small JSON object in the user's home directory::

    {
        "password": "...",
        "keyfilePath": "/path/to/key",
        "databasePath": "/path/to/db.kdbx"
    }

It is written whole by ``defter --init`` and read once at startup.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from defter.errors import (
    ConfigCorruptError,
    ConfigIncompleteError,
    ConfigNotFoundError,
    ConfigWriteError,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".defterrc.json"

# (attribute, JSON key, message when missing); checked in this order
_FIELDS = (
    ("password", "password", "password not found, reset your config"),
    ("keyfile_path", "keyfilePath", "key not found, reset your config"),
    ("database_path", "databasePath", "db not found, reset your config"),
)


def default_config_path() -> Path:
    """Return the per-user config location, ``~/.defterrc.json``."""
    return Path.home() / CONFIG_FILENAME


@dataclass(frozen=True)
class Config:
    password: str
    keyfile_path: str
    database_path: str

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for attr, key, _ in _FIELDS}

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build a Config from its JSON form, rejecting partial records."""
        values = {}
        for attr, key, message in _FIELDS:
            value = data.get(key)
            if not isinstance(value, str) or not value:
                raise ConfigIncompleteError(message)
            values[attr] = value
        return cls(**values)


class ConfigStore:
    """Load and save a :class:`Config` at a fixed path."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> Config:
        """Read the config file.

        Raises:
            ConfigNotFoundError: If the file is missing or unreadable.
            ConfigCorruptError: If the contents are not a JSON object.
            ConfigIncompleteError: If a mandatory field is missing or empty.
        """
        logger.debug("Reading config from %s", self.path)
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            raise ConfigNotFoundError(f"no such file: {self.path}")
        except OSError as exc:
            raise ConfigNotFoundError(
                f"cannot read {self.path}: {exc.strerror or exc}"
            ) from exc

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise ConfigCorruptError(f"cannot parse {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigCorruptError(f"{self.path} does not hold a JSON object")

        return Config.from_dict(data)

    def save(self, config: Config) -> None:
        """Replace the config file with ``config``.

        The JSON is written to a fresh temporary sibling (mode 0600, unique
        name) and moved over the target, so readers see either the old file
        or the complete new one.

        Raises:
            ConfigWriteError: On any filesystem failure.
        """
        text = json.dumps(config.to_dict(), indent=4)
        logger.debug("Writing config to %s", self.path)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp"
            )
        except OSError as exc:
            raise ConfigWriteError(
                f"cannot write {self.path}: {exc.strerror or exc}"
            ) from exc

        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, self.path)
        except OSError as exc:
            try:
                tmp.unlink()
            except FileNotFoundError:
                pass
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp)
            raise ConfigWriteError(
                f"cannot write {self.path}: {exc.strerror or exc}"
            ) from exc
