"""Domain-specific exceptions."""


class Web2PdfError(Exception):
    """Base class for all web2pdf errors."""


class InvalidWorkItems(Web2PdfError):
    """The flat URL/PATH list could not be split into pairs."""


class BrowserLaunchError(Web2PdfError):
    """Playwright could not start or launch Chromium."""


class CookieFileParseError(Web2PdfError):
    """A cookie jar was unreadable or contained a malformed line."""

    def __str__(self) -> str:
        return f"Error parsing Cookie file: {super().__str__()}"


class RenderFailure(Web2PdfError):
    """Playwright failed while turning one page into a PDF."""
