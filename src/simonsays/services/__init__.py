"""Service modules for CLI and web API."""

from . import autoplayer, cli, narrator, web_api, web_session

__all__ = ["autoplayer", "cli", "narrator", "web_api", "web_session"]
