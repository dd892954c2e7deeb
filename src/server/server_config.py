"""Configuration for the server."""

MAX_PAGES: int = 100
MAX_HTML_CHARS: int = 2_000_000
APP_TITLE: str = "sectionhtml"
