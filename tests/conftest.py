"""Test setup for sectionhtml."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from jinja2 import DictLoader, Environment

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sectionhtml.html_writer import HtmlWriter  # noqa: E402
from sectionhtml.request_scope import RequestScope  # noqa: E402

# Stand-in for the packaged table of contents: one comment per inclusion.
TOC_MARKER_TEMPLATE = "<!--toc:{{ page.title }}-->"


@pytest.fixture
def toc_environment() -> Environment:
    """Jinja2 environment whose table of contents is a single marker comment."""
    return Environment(loader=DictLoader({"toc.html": TOC_MARKER_TEMPLATE}), autoescape=True)


@pytest.fixture
def scope() -> RequestScope:
    """A fresh request scope, closed after the test."""
    with RequestScope() as request_scope:
        yield request_scope


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def writer(sink: io.StringIO) -> HtmlWriter:
    return HtmlWriter(sink)
