"""defter - KeePass credential lookup from the terminal.

Decrypts a KDBX database via pykeepass, lets the user search entry
titles interactively, prints the chosen entry and copies its password
to the clipboard.
"""

__version__ = "0.2.0"

from defter.errors import (  # noqa: F401
    DefterError,
    ConfigError,
    ConfigWriteError,
    DatabaseOpenError,
    ArgumentMissingError,
    ClipboardError,
)
from defter.config import Config, ConfigStore, default_config_path  # noqa: F401
from defter.reader import load_entries, open_database  # noqa: F401
from defter.projector import EntryIndex, EntryProjector, ProjectedEntry  # noqa: F401
from defter.selector import filter_titles, select  # noqa: F401
from defter.output import OutputPresenter  # noqa: F401
from defter.cli import main  # noqa: F401
