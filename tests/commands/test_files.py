"""Tests for ``cat`` and ``more``."""

from blote.bootloader import Bootloader
from blote.commands.files import PAGE_LENGTH
from blote.terminal import Terminal


def _logged_in() -> Terminal:
    """Boot the bundled terminal and log alice in to the mainframe."""
    terminal = Bootloader().boot()
    for line in ("login", "alice", "wonderland"):
        terminal.execute(line)
    return terminal


class TestCat:
    """Verify printing whole files."""

    def test_relative_file(self) -> None:
        """A file next to the cursor is printed."""
        terminal = _logged_in()
        assert terminal.execute("cat notes.txt") == (
            "Remember to check mail.\nThe archive host is called 'archive'."
        )

    def test_absolute_file(self) -> None:
        """Absolute paths work too."""
        terminal = _logged_in()
        assert terminal.execute("cat /docs/welcome.txt").startswith("Welcome to the mainframe.")

    def test_does_not_move_cursor(self) -> None:
        """Reading a file elsewhere leaves the cursor alone."""
        terminal = _logged_in()
        terminal.execute("cat docs/report.txt")
        assert terminal.active_shell.current_directory.path == "/home/alice"

    def test_missing_argument(self) -> None:
        """Without a path, cat prints its usage."""
        terminal = _logged_in()
        assert terminal.execute("cat") == "Error:  usage: cat <file>"

    def test_voided_path_is_missing_argument(self) -> None:
        """A ``//`` path counts as no argument."""
        terminal = _logged_in()
        assert terminal.execute("cat //notes.txt") == "Error:  usage: cat <file>"

    def test_directory_is_not_a_file(self) -> None:
        """Directories cannot be printed."""
        terminal = _logged_in()
        assert terminal.execute("cat docs") == "Error:  Invalid File"

    def test_executable_is_not_a_file(self) -> None:
        """Commands are not text files."""
        terminal = _logged_in()
        assert terminal.execute("cat /bin/cd") == "Error:  Invalid File"

    def test_unknown_file(self) -> None:
        """A missing name is an invalid path."""
        terminal = _logged_in()
        assert terminal.execute("cat nope.txt") == "Error:  Invalid Path"

    def test_other_home_refused(self) -> None:
        """Files in other users' homes are off limits."""
        terminal = _logged_in()
        assert terminal.execute("cat /home/bob/todo.txt") == "Error:  Insufficient Permissions"

    def test_available_before_login(self) -> None:
        """The bootstrap namespace has cat and a readme."""
        terminal = Bootloader().boot()
        assert "not logged in" in terminal.execute("cat readme.txt")


class TestMore:
    """Verify paging."""

    def test_short_file_needs_no_prompt(self) -> None:
        """A file shorter than a page prints at once."""
        terminal = _logged_in()
        assert terminal.execute("more notes.txt").count("\n") == 1
        assert not terminal.awaiting_input

    def test_first_page_then_prompt(self) -> None:
        """A long file stops after one page."""
        terminal = _logged_in()
        output = terminal.execute("more /docs/manual.txt")
        assert len(output.splitlines()) == PAGE_LENGTH
        assert terminal.awaiting_input
        assert terminal.prompt == "--More--"

    def test_next_page(self) -> None:
        """Any line shows the rest."""
        terminal = _logged_in()
        terminal.execute("more /docs/manual.txt")
        rest = terminal.execute("").splitlines()
        assert rest[0].startswith(f"Section {PAGE_LENGTH + 1}.")
        assert rest[-1].startswith("Section 30.")
        assert not terminal.awaiting_input
        assert terminal.prompt == "alice@mainframe $ "

    def test_quit(self) -> None:
        """``q`` stops paging."""
        terminal = _logged_in()
        terminal.execute("more /docs/manual.txt")
        assert terminal.execute("q") == ""
        assert not terminal.awaiting_input

    def test_errors_match_cat(self) -> None:
        """more reports the same errors as cat, with its own usage."""
        terminal = _logged_in()
        assert terminal.execute("more") == "Error:  usage: more <file>"
        assert terminal.execute("more docs") == "Error:  Invalid File"
