"""Print a selected entry and put its password on the clipboard."""

import logging
from typing import Optional

import pyperclip
from rich.console import Console
from rich.text import Text

from defter.errors import ClipboardError
from defter.projector import ProjectedEntry

logger = logging.getLogger(__name__)

LABEL_STYLE = "bold underline"
VALUE_STYLE = "bright_black"


class OutputPresenter:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def present(self, entry: ProjectedEntry) -> bool:
        """Print the entry's non-empty fields and copy its password.

        Returns True when a password was copied to the clipboard.

        Raises:
            ClipboardError: If the system clipboard is unavailable.
        """
        for field in entry.fields():
            if not field.value:
                continue
            line = Text.assemble(
                (field.label, LABEL_STYLE), ": ", (field.value, VALUE_STYLE)
            )
            self.console.print(line, soft_wrap=True)

        password = entry.password.value
        if not password:
            return False

        try:
            pyperclip.copy(password)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
        logger.debug("Password copied to clipboard")
        return True
