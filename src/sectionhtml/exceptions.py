"""Custom exceptions for sectionhtml."""


class SectionHtmlError(Exception):
    """Base exception for sectionhtml operations."""


class RenderingError(SectionHtmlError):
    """Error while rendering a page or one of its elements."""


class DepthExceededError(RenderingError):
    """Sectioning nested deeper than the last heading level (h6)."""

    def __init__(self, level: int) -> None:
        super().__init__(
            f"Sectioning exceeded depth of h6 (including page as h1): sectioning level = {level}"
        )
        self.level = level


class SkipPageError(SectionHtmlError):
    """Explicit request to stop rendering the current page."""


class DocumentError(SectionHtmlError):
    """Error in the structure of an input document."""


class FetchError(SectionHtmlError):
    """Error during source document fetching."""


class SourceNotAvailableError(FetchError):
    """Source document does not exist at the requested location."""
