"""KDBX database loading using pykeepass.

This module turns a KeePass database into raw entries for the rest of
defter. It handles:
  - Opening KDBX databases with a password and key file
  - Walking the group tree, skipping the recycle bin
  - Reading each entry's string fields in stored order

A raw entry is a list of ``{"Key": name, "Value": value}`` records. A
value the database marks as protected (normally the password) is wrapped
as ``{"_": text, "Protected": "True"}``.
"""

import logging
from pathlib import Path
from typing import Optional

from pykeepass import PyKeePass
from pykeepass.exceptions import CredentialsError

from defter.errors import (
    AuthenticationError,
    DatabaseNotFoundError,
    DatabaseOpenError,
)

logger = logging.getLogger(__name__)

PROTECTED_VALUE_KEY = "_"


def open_database(
    database_path: str,
    password: Optional[str],
    keyfile: Optional[str] = None,
) -> PyKeePass:
    """Open a KeePass database.

    Args:
        database_path: Path to the .kdbx file.
        password: Master password.
        keyfile: Optional path to a key file.

    Returns:
        An opened PyKeePass database instance.

    Raises:
        DatabaseNotFoundError: If the database or key file does not exist.
        AuthenticationError: If the credentials are invalid.
        DatabaseOpenError: For other database errors.
    """
    db_path = Path(database_path).expanduser()
    if not db_path.is_file():
        raise DatabaseNotFoundError(f"Database not found: {db_path}")

    key_path = None
    if keyfile:
        key_path = Path(keyfile).expanduser()
        if not key_path.is_file():
            raise DatabaseNotFoundError(f"Key file not found: {key_path}")

    logger.debug("Opening database %s", db_path)
    try:
        return PyKeePass(
            str(db_path),
            password=password,
            keyfile=str(key_path) if key_path else None,
        )
    except CredentialsError:
        # Intentionally vague -- do NOT leak password or pykeepass internals
        raise AuthenticationError(
            "Failed to open database (wrong password or key file?)"
        )
    except Exception as exc:
        raise DatabaseOpenError(f"Failed to open database: {exc}") from exc


def raw_entry(entry) -> list[dict]:
    """Read the string fields of a pykeepass Entry in stored order."""
    fields = []
    # Read the XML tree: the public Entry properties lose field order
    # and the Protected attribute.
    for string in entry._element.findall("String"):
        key = string.findtext("Key")
        value_elem = string.find("Value")
        value = value_elem.text if value_elem is not None else None
        if value_elem is not None and value_elem.get("Protected") == "True":
            value = {PROTECTED_VALUE_KEY: value, "Protected": "True"}
        fields.append({"Key": key, "Value": value})
    return fields


def iter_entries(kp: PyKeePass):
    """Yield entries depth-first, a group's entries before its subgroups."""
    recycle_bin = kp.recyclebin_group
    recycle_uuid = recycle_bin.uuid if recycle_bin is not None else None

    def _walk(group):
        yield from group.entries
        for sub in group.subgroups:
            if recycle_uuid is not None and sub.uuid == recycle_uuid:
                continue
            yield from _walk(sub)

    yield from _walk(kp.root_group)


def load_entries(
    database_path: str,
    password: Optional[str],
    keyfile: Optional[str] = None,
) -> list[list[dict]]:
    """Open the database and return every entry as a raw entry.

    Raises:
        DatabaseOpenError: If the database cannot be opened.
    """
    kp = open_database(database_path, password, keyfile)
    entries = [raw_entry(entry) for entry in iter_entries(kp)]
    logger.debug("Loaded %d entries", len(entries))
    return entries
