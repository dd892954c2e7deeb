"""Tests for heading levels, the table of contents gate and section writing."""

from __future__ import annotations

import io
from unittest.mock import Mock

import pytest
from jinja2 import DictLoader, Environment

from sectionhtml.exceptions import DepthExceededError, RenderingError, SkipPageError
from sectionhtml.html_writer import HtmlWriter
from sectionhtml.model import Element, Page, aside, container, nav, section
from sectionhtml.page_index import PageIndex
from sectionhtml.page_renderer import PageRenderContext, render_page
from sectionhtml.request_scope import IdentityMap, RequestScope
from sectionhtml.section_renderer import (
    TOC_DONE_PER_PAGE_ATTRIBUTE,
    ensure_toc_written,
    resolve_level,
    write_aside,
    write_nav,
    write_section,
    write_sectioning_content,
)


def _nest(depth: int) -> list[Element]:
    """Chain of ``depth + 1`` sections, each inside the previous one."""
    chain = [section("Level 0")]
    for index in range(1, depth + 1):
        chain.append(chain[-1].add_child(section(f"Level {index}")))
    return chain


def _failing_environment(error: BaseException) -> Environment:
    """Environment whose table of contents template raises ``error``."""

    def fail() -> str:
        raise error

    environment = Environment(loader=DictLoader({"toc.html": "{{ fail() }}"}), autoescape=True)
    environment.globals["fail"] = fail
    return environment


class TestResolveLevel:
    """Tests for resolve_level."""

    def test_no_sectioning_ancestors_is_level_two(self) -> None:
        """A top-level element sits right below the page title."""
        assert resolve_level(section("Intro")) == 2

    @pytest.mark.parametrize("depth", [0, 1, 2, 3, 4])
    def test_level_is_two_plus_sectioning_depth(self, depth: int) -> None:
        """Each sectioning ancestor adds one level."""
        chain = _nest(depth)
        assert resolve_level(chain[-1]) == 2 + depth

    def test_depth_five_exceeds_h6(self) -> None:
        """The sixth nested element would need an h7."""
        chain = _nest(5)
        for depth, element in enumerate(chain[:-1]):
            assert resolve_level(element) == 2 + depth

        with pytest.raises(DepthExceededError, match="7") as exc_info:
            resolve_level(chain[-1])
        assert exc_info.value.level == 7

    def test_containers_do_not_count(self) -> None:
        """Plain wrappers between sectioning ancestors leave the level unchanged."""
        outer = section("Outer")
        wrapper = outer.add_child(container())
        inner_wrapper = wrapper.add_child(container())
        inner = inner_wrapper.add_child(nav("Inner"))
        deepest = inner.add_child(container()).add_child(aside("Deepest"))

        assert resolve_level(inner) == 3
        assert resolve_level(deepest) == 4

    def test_mixed_kinds_scenario(self) -> None:
        """Section > Nav > Aside resolves to 2, 3 and 4."""
        page = Page(title="Handbook")
        outer = page.add_child(section("Chapter"))
        links = outer.add_child(nav("Links"))
        note = links.add_child(aside("Note"))

        assert [resolve_level(element) for element in (outer, links, note)] == [2, 3, 4]


class TestEnsureTocWritten:
    """Tests for ensure_toc_written."""

    def test_writes_once_per_page(self, scope: RequestScope) -> None:
        """Repeated calls for one page only write the fragment once."""
        page = Page(title="Handbook")
        written: list[Page] = []

        for _ in range(5):
            ensure_toc_written(scope, page, written.append)

        assert written == [page]

    def test_structurally_identical_pages_are_distinct(self, scope: RequestScope) -> None:
        """Deduplication goes by page identity, not equality."""
        first = Page(title="Same")
        second = Page(title="Same")
        written: list[Page] = []

        ensure_toc_written(scope, first, written.append)
        ensure_toc_written(scope, second, written.append)
        ensure_toc_written(scope, first, written.append)

        assert len(written) == 2
        assert written[0] is first
        assert written[1] is second

    def test_independent_requests_each_write(self) -> None:
        """Markers never leak from one request scope into another."""
        page = Page(title="Handbook")
        written: list[Page] = []

        with RequestScope() as first_request:
            ensure_toc_written(first_request, page, written.append)
            ensure_toc_written(first_request, page, written.append)
        with RequestScope() as second_request:
            ensure_toc_written(second_request, page, written.append)

        assert written == [page, page]

    def test_store_created_lazily(self, scope: RequestScope) -> None:
        """The tracking store only exists after the first call."""
        attribute = scope.attribute(TOC_DONE_PER_PAGE_ATTRIBUTE)
        assert attribute.get() is None

        ensure_toc_written(scope, Page(title="Handbook"), lambda page: None)

        store = attribute.get()
        assert isinstance(store, IdentityMap)
        assert len(store) == 1

    def test_failing_writer_is_not_retried(self, scope: RequestScope) -> None:
        """A failure propagates and the page stays marked."""
        page = Page(title="Handbook")
        calls: list[Page] = []

        def failing_writer(toc_page: Page) -> None:
            calls.append(toc_page)
            raise ValueError("template exploded")

        with pytest.raises(ValueError, match="template exploded"):
            ensure_toc_written(scope, page, failing_writer)
        ensure_toc_written(scope, page, failing_writer)

        assert calls == [page]


class TestWriteSectioningContent:
    """Tests for writing sections, navs and asides."""

    def test_writes_section_with_body(self, toc_environment: Environment) -> None:
        """Container, heading and content div are written in order."""
        page = Page(title="Guide")
        page.add_child(section("Intro", id="intro", body="<p>Hi</p>"))

        html = render_page(page, environment=toc_environment)

        assert html == (
            "<h1>Guide</h1>"
            "<!--toc:Guide-->"
            '<section id="intro" class="sectionhtml-section">'
            "<h2>Intro</h2>"
            '<div class="sectionhtml-section-h2-content"><p>Hi</p></div>'
            "</section>"
        )

    def test_nested_kinds_share_one_toc(self, toc_environment: Environment) -> None:
        """Section > Nav > Aside renders h2/h3/h4 and a single table of contents."""
        page = Page(title="Handbook")
        outer = page.add_child(section("Chapter"))
        links = outer.add_child(nav("Links"))
        links.add_child(aside("Note", body="<p>Mind the gap</p>"))

        html = render_page(page, environment=toc_environment)

        assert html.count("<!--toc:Handbook-->") == 1
        assert html.index("<!--toc:Handbook-->") < html.index("<section")
        assert '<section class="sectionhtml-section"><h2>Chapter</h2>' in html
        assert '<div class="sectionhtml-section-h2-content"><nav class="sectionhtml-section"><h3>Links</h3>' in html
        assert '<div class="sectionhtml-section-h3-content"><aside class="sectionhtml-section"><h4>Note</h4>' in html
        assert '<div class="sectionhtml-section-h4-content"><p>Mind the gap</p></div></aside>' in html
        assert html.endswith("</aside></div></nav></div></section>")

    def test_empty_body_has_no_content_div(
        self, scope: RequestScope, writer: HtmlWriter, sink: io.StringIO, toc_environment: Environment
    ) -> None:
        """Only a non-empty body gets the nested content container."""
        element = section("Empty")
        context = PageRenderContext(scope=scope, environment=toc_environment)

        write_section(scope, writer, context, element)

        assert sink.getvalue() == '<section class="sectionhtml-section"><h2>Empty</h2></section>'

    def test_page_less_fragment_skips_toc(
        self, scope: RequestScope, writer: HtmlWriter, sink: io.StringIO, toc_environment: Environment
    ) -> None:
        """Elements without a page never consult the table of contents gate."""
        context = PageRenderContext(scope=scope, environment=toc_environment)

        write_nav(scope, writer, context, nav("Menu", body="<a href='/'>Home</a>"))

        assert "<!--toc" not in sink.getvalue()
        assert scope.attribute(TOC_DONE_PER_PAGE_ATTRIBUTE).get() is None

    def test_id_is_qualified_with_page_index(
        self, scope: RequestScope, writer: HtmlWriter, sink: io.StringIO, toc_environment: Environment
    ) -> None:
        """With a page index the id becomes page-qualified."""
        first = Page(title="First")
        second = Page(title="Second")
        element = second.add_child(aside("Aside", id="remark"))
        context = PageRenderContext(
            scope=scope,
            environment=toc_environment,
            page_index=PageIndex([first, second]),
        )

        write_aside(scope, writer, context, element)

        assert '<aside id="page2-remark" class="sectionhtml-section">' in sink.getvalue()

    def test_heading_label_is_escaped(
        self, scope: RequestScope, writer: HtmlWriter, sink: io.StringIO, toc_environment: Environment
    ) -> None:
        """Labels are text, not markup."""
        context = PageRenderContext(scope=scope, environment=toc_environment)

        write_section(scope, writer, context, section("<Tips & Tricks>"))

        assert "<h2>&lt;Tips &amp; Tricks&gt;</h2>" in sink.getvalue()

    def test_wrong_kind_is_rejected(
        self, scope: RequestScope, writer: HtmlWriter, toc_environment: Environment
    ) -> None:
        """Kind-specific writers only accept their own kind."""
        context = PageRenderContext(scope=scope, environment=toc_environment)

        with pytest.raises(TypeError):
            write_section(scope, writer, context, nav("Menu"))
        with pytest.raises(TypeError):
            write_sectioning_content(scope, writer, context, container())

    def test_too_deep_aborts_and_closes_open_elements(
        self, scope: RequestScope, writer: HtmlWriter, sink: io.StringIO, toc_environment: Environment
    ) -> None:
        """DepthExceededError propagates and every opened container is closed."""
        page = Page(title="Deep")
        chain = [page.add_child(section("Level 0"))]
        for index in range(1, 6):
            chain.append(chain[-1].add_child(section(f"Level {index}")))
        context = PageRenderContext(scope=scope, environment=toc_environment)

        with pytest.raises(DepthExceededError) as exc_info:
            write_section(scope, writer, context, chain[0])

        assert exc_info.value.level == 7
        output = sink.getvalue()
        assert "<h6>Level 4</h6>" in output
        assert output.count("<section") == output.count("</section>") == 5
        assert output.count("<div") == output.count("</div>")

    def test_unexpected_toc_failure_is_wrapped(self, scope: RequestScope, writer: HtmlWriter) -> None:
        """Errors outside the expected signals become RenderingError."""
        page = Page(title="Broken")
        element = page.add_child(section("Intro"))
        context = PageRenderContext(scope=scope, environment=_failing_environment(ValueError("bad toc")))

        with pytest.raises(RenderingError, match="bad toc") as exc_info:
            write_section(scope, writer, context, element)

        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize(
        "signal",
        [SkipPageError("stop here"), OSError("connection reset")],
    )
    def test_expected_signals_pass_through(
        self, scope: RequestScope, writer: HtmlWriter, signal: Exception
    ) -> None:
        """Early termination and I/O errors reach the caller unwrapped."""
        page = Page(title="Signals")
        element = page.add_child(section("Intro"))
        context = PageRenderContext(scope=scope, environment=_failing_environment(signal))

        with pytest.raises(type(signal)) as exc_info:
            write_section(scope, writer, context, element)

        assert exc_info.value is signal

    def test_unexpected_body_failure_is_wrapped_and_tags_closed(
        self, scope: RequestScope, writer: HtmlWriter, sink: io.StringIO, toc_environment: Environment
    ) -> None:
        """A failure while streaming the body becomes RenderingError; open tags still close."""
        outer = section("Outer")
        child = outer.add_child(container())
        context = PageRenderContext(scope=scope, environment=toc_environment)
        context.write_element = Mock(side_effect=KeyError("child"))

        with pytest.raises(RenderingError, match="Outer") as exc_info:
            write_section(scope, writer, context, outer)

        assert isinstance(exc_info.value.__cause__, KeyError)
        context.write_element.assert_called_once_with(child, writer)
        assert sink.getvalue() == (
            '<section class="sectionhtml-section"><h2>Outer</h2>'
            '<div class="sectionhtml-section-h2-content"></div>'
            "</section>"
        )

    def test_skip_from_body_passes_through(
        self, scope: RequestScope, writer: HtmlWriter, toc_environment: Environment
    ) -> None:
        """SkipPageError raised while streaming the body is not wrapped."""
        outer = section("Outer")
        outer.add_child(container())
        signal = SkipPageError("skip the rest")
        context = PageRenderContext(scope=scope, environment=toc_environment)
        context.write_element = Mock(side_effect=signal)

        with pytest.raises(SkipPageError) as exc_info:
            write_section(scope, writer, context, outer)

        assert exc_info.value is signal
