"""Filter-as-you-type title picker built on prompt_toolkit.

The search box and the candidate list are redrawn on every keystroke.
Up/Down move the highlight, Enter picks the highlighted title and
Ctrl-C cancels.
"""

from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.layout.processors import BeforeInput
from prompt_toolkit.styles import Style

STYLE = Style.from_dict(
    {
        "prompt": "bold",
        "selected": "reverse",
        "empty": "italic #888888",
    }
)


def filter_titles(titles, query: str) -> list[str]:
    """Return the titles containing ``query``, ignoring case, in order."""
    needle = query.casefold()
    return [title for title in titles if needle in title.casefold()]


class Selector:
    """Interactive picker over an ordered list of titles.

    The candidate list is always computed from the current search text,
    so text placed in the box up front filters exactly as if typed.
    """

    def __init__(self, titles, prompt: str = "Search: ", max_rows: int = 10):
        self.titles = list(titles)
        self.prompt = prompt
        self.max_rows = max_rows
        self.index = 0
        self.buffer = Buffer(multiline=False, on_text_changed=self._reset_index)

    def _reset_index(self, _buffer) -> None:
        self.index = 0

    @property
    def query(self) -> str:
        return self.buffer.text

    def candidates(self) -> list[str]:
        return filter_titles(self.titles, self.buffer.text)

    def highlighted(self) -> Optional[str]:
        candidates = self.candidates()
        if not candidates:
            return None
        return candidates[min(self.index, len(candidates) - 1)]

    def move(self, step: int) -> None:
        count = len(self.candidates())
        self.index = max(0, min(self.index + step, count - 1)) if count else 0

    def _render(self):
        candidates = self.candidates()
        if not candidates:
            return [("class:empty", "  (no matches)")]

        start = max(0, self.index - self.max_rows + 1)
        lines = []
        for pos, title in enumerate(candidates[start:start + self.max_rows], start):
            if lines:
                lines.append(("", "\n"))
            if pos == self.index:
                lines.append(("class:selected", f"> {title}"))
            else:
                lines.append(("", f"  {title}"))
        return lines

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up")
        def _up(event):
            self.move(-1)

        @kb.add("down")
        def _down(event):
            self.move(1)

        @kb.add("enter")
        def _commit(event):
            event.app.exit(result=self.highlighted())

        @kb.add("c-c")
        def _cancel(event):
            event.app.exit(result=None)

        return kb

    def run(self, initial_query: Optional[str] = None, input=None, output=None):
        """Block on the terminal until a title is picked or input is cancelled.

        Returns the picked title, or None when cancelled or nothing matched.
        """
        self.buffer.set_document(Document(initial_query or ""), bypass_readonly=True)
        self.index = 0

        search = Window(
            BufferControl(
                self.buffer,
                input_processors=[BeforeInput(self.prompt, style="class:prompt")],
            ),
            height=1,
        )
        body = HSplit([search, Window(FormattedTextControl(self._render))])
        app = Application(
            layout=Layout(body, focused_element=search),
            key_bindings=self._key_bindings(),
            style=STYLE,
            erase_when_done=True,
            input=input,
            output=output,
        )
        return app.run()


def select(titles, initial_query: Optional[str] = None, input=None, output=None):
    """Let the user pick one of ``titles``; None means cancelled."""
    return Selector(titles).run(initial_query, input=input, output=output)
