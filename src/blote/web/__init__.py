"""Browser-based web UI for the terminal.

This package provides a Flask application that exposes the terminal
through a web browser.  It is an **optional** extra — install with::

    pip install blote[web]

The ``create_app`` factory in ``app.py`` boots a terminal and serves
three endpoints:

- ``GET /`` — HTML terminal page.
- ``POST /api/execute`` — execute one input line and return JSON.
- ``GET /api/status`` — the active session, for the page header.
"""
