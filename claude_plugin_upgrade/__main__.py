"""Entry point for ``python -m claude_plugin_upgrade``."""

from __future__ import annotations

from .cli import app

if __name__ == "__main__":
    app()
