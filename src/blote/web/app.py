"""Flask application factory for the terminal web UI.

The ``create_app`` function boots a terminal and returns a Flask app
with three endpoints:

- ``GET /`` — render the terminal HTML page with the banner.
- ``POST /api/execute`` — execute one line and return JSON.
- ``GET /api/status`` — return the active session.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, render_template, request

from blote.bootloader import Bootloader, parse_command_line
from blote.repl import format_banner

if TYPE_CHECKING:
    from pathlib import Path

_HTTP_BAD_REQUEST = 400


def create_app(data_dir: Path | None = None, *, debug: bool = False) -> Flask:
    """Create and configure the Flask application.

    Boot a terminal from *data_dir* and wire up routes.

    Returns:
        A configured Flask application ready to serve.

    """
    terminal = Bootloader(data_dir, debug=debug).boot()
    banner = format_banner(terminal)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", title="BLOTE", banner=banner, prompt=terminal.prompt)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute one input line and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output``, ``prompt`` and ``echo`` fields.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command: str = data["command"]
        output = terminal.execute(command)
        return jsonify({"output": output, "prompt": terminal.prompt, "echo": terminal.prompt_echo})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the active session.

        Returns:
            JSON with ``user``, ``server``, ``path`` and ``depth`` fields.

        """
        shell = terminal.active_shell
        return jsonify(
            {
                "user": shell.username,
                "server": shell.server.name if shell.server is not None else None,
                "path": shell.current_directory.path,
                "depth": terminal.depth,
            }
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``blote-web`` console entry point.  It accepts the same
    ``--debug`` and ``--data-dir`` options as ``blote``.
    """
    options = parse_command_line(sys.argv[1:])
    app = create_app(options.data_dir, debug=options.debug)
    app.run(debug=options.debug, port=8080)
