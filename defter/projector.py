"""Normalized five-field view of raw database entries."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from defter.reader import PROTECTED_VALUE_KEY

# (attribute, database key, sub-key holding the value)
DEFAULT_FIELDS = (
    ("title", "Title", None),
    ("password", "Password", PROTECTED_VALUE_KEY),
    ("notes", "Notes", None),
    ("url", "URL", None),
    ("username", "UserName", None),
)


@dataclass(frozen=True)
class LabeledValue:
    label: str
    value: Optional[str] = None


@dataclass(frozen=True)
class ProjectedEntry:
    title: LabeledValue
    password: LabeledValue
    notes: LabeledValue
    url: LabeledValue
    username: LabeledValue

    def fields(self) -> list[LabeledValue]:
        """Return the five fields in display order."""
        return [self.title, self.password, self.notes, self.url, self.username]


def _extract(fields, key: str, sub_key: Optional[str] = None) -> LabeledValue:
    item = next((f for f in fields if f.get("Key") == key), None)
    if item is None:
        return LabeledValue(key)

    value = item.get("Value")
    # fields the user chose to protect arrive wrapped too
    if isinstance(value, Mapping):
        value = value.get(sub_key or PROTECTED_VALUE_KEY)
    return LabeledValue(key, value)


class EntryProjector:
    """Map raw entries onto :class:`ProjectedEntry`.

    ``fields`` is a table of ``(attribute, key, sub_key)`` triples naming
    which database field feeds each attribute. A wrapped value is read
    through ``sub_key`` (the protected-value key by default); a plain
    value is used as-is.
    """

    def __init__(self, fields=DEFAULT_FIELDS):
        self.fields = tuple(fields)

    def project(self, raw_entry) -> ProjectedEntry:
        return ProjectedEntry(
            **{
                attr: _extract(raw_entry, key, sub_key)
                for attr, key, sub_key in self.fields
            }
        )


class EntryIndex:
    """Projected entries of one database, in database order."""

    def __init__(self, entries):
        self.entries = list(entries)

    @classmethod
    def from_raw(cls, raw_entries, projector: Optional[EntryProjector] = None):
        projector = projector or EntryProjector()
        return cls(projector.project(raw) for raw in raw_entries)

    def __len__(self) -> int:
        return len(self.entries)

    def titles(self) -> list[str]:
        """Titles to offer for selection; untitled entries are left out."""
        return [e.title.value for e in self.entries if e.title.value]

    def find(self, title: str) -> Optional[ProjectedEntry]:
        """Return the first entry with ``title``, or None."""
        for entry in self.entries:
            if entry.title.value == title:
                return entry
        return None
