"""Interactive REPL (Read-Eval-Print Loop) for the terminal.

This module is the thin I/O wrapper around ``Terminal``:

    1. **Read** — show ``terminal.prompt`` and read a line (with
       ``getpass`` when the terminal asks for a secret).
    2. **Eval** — pass the line to ``terminal.execute()``.
    3. **Print** — display the result.
    4. **Loop** — forever.  Logging out of the last shell brings back
       the default one; only Ctrl+D or Ctrl+C end the program.

The helper ``format_banner`` is pure and testable.  ``run()`` is the
I/O entrypoint and ``main()`` the console script.
"""

import getpass
import readline
import sys

from blote.bootloader import PROGRAM_TITLE, PROGRAM_VERSION, Bootloader, parse_command_line
from blote.completer import Completer
from blote.logging import Logger, LogLevel
from blote.terminal import Terminal


def format_banner(terminal: Terminal) -> str:
    """Return the title line followed by the terminal's greeting.

    Args:
        terminal: A booted terminal.

    Returns:
        A string suitable for printing before the first prompt.

    """
    title = f"{PROGRAM_TITLE} {PROGRAM_VERSION}" + (" (debug)" if terminal.debug else "")
    greeting = terminal.banner()
    return f"{title}\n\n{greeting}" if greeting else title


def read_line(terminal: Terminal) -> str:
    """Read one line, hiding the input if the terminal asks for a secret."""
    if terminal.prompt_echo:
        return input(terminal.prompt)
    return getpass.getpass(terminal.prompt)


def run(args: list[str]) -> None:
    """Boot the terminal and run the interactive loop.

    Args:
        args: Command-line arguments (without the program name).

    """
    options = parse_command_line(args)
    logger = Logger(
        echo=sys.stderr if options.debug else None,
        echo_level=LogLevel.DEBUG,
    )
    terminal = Bootloader(options.data_dir, debug=options.debug, logger=logger).boot()

    # Wire up tab completion via readline.
    completer = Completer(terminal)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(terminal))  # noqa: T201

    try:
        while True:
            try:
                line = read_line(terminal)
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = terminal.execute(line)
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201

    finally:
        terminal.cancel()
        print("Connection closed.")  # noqa: T201


def main() -> None:
    """Console entry point for ``blote``."""
    run(sys.argv[1:])
