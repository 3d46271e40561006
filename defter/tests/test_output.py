"""Tests for printing entries and copying passwords."""

import io
from unittest import mock

import pyperclip
import pytest
from rich.console import Console

from defter.errors import ClipboardError
from defter.output import OutputPresenter
from defter.projector import LabeledValue, ProjectedEntry


def _entry(title=None, password=None, notes=None, url=None, username=None):
    return ProjectedEntry(
        title=LabeledValue("Title", title),
        password=LabeledValue("Password", password),
        notes=LabeledValue("Notes", notes),
        url=LabeledValue("URL", url),
        username=LabeledValue("UserName", username),
    )


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def presenter(out):
    return OutputPresenter(Console(file=out, force_terminal=False, width=120))


@pytest.fixture
def clipboard():
    with mock.patch("defter.output.pyperclip.copy") as copy:
        yield copy


class TestPresent:
    """Test printing entry fields and copying the password."""

    def test_skips_absent_fields(self, presenter, out, clipboard):
        copied = presenter.present(_entry(notes="hi"))
        assert out.getvalue() == "Notes: hi\n"
        assert copied is False
        clipboard.assert_not_called()

    def test_skips_empty_fields(self, presenter, out, clipboard):
        presenter.present(_entry(title="Bank", url="", password=""))
        assert out.getvalue() == "Title: Bank\n"
        clipboard.assert_not_called()

    def test_field_order(self, presenter, out, clipboard):
        presenter.present(
            _entry(
                title="Bank",
                password="pw",
                notes="n",
                url="https://bank.example",
                username="alice",
            )
        )
        assert out.getvalue().splitlines() == [
            "Title: Bank",
            "Password: pw",
            "Notes: n",
            "URL: https://bank.example",
            "UserName: alice",
        ]

    def test_copies_password_exactly(self, presenter, clipboard):
        assert presenter.present(_entry(title="Bank", password="secret123")) is True
        clipboard.assert_called_once_with("secret123")

    def test_password_whitespace_kept(self, presenter, clipboard):
        presenter.present(_entry(password=" pass word \t"))
        clipboard.assert_called_once_with(" pass word \t")

    def test_markup_not_interpreted(self, presenter, out, clipboard):
        presenter.present(_entry(notes="[bold]x[/bold]"))
        assert out.getvalue() == "Notes: [bold]x[/bold]\n"

    def test_clipboard_failure(self, presenter, clipboard):
        clipboard.side_effect = pyperclip.PyperclipException("no clipboard")
        with pytest.raises(ClipboardError, match="no clipboard"):
            presenter.present(_entry(password="pw"))
