"""Custom exception classes for the ANA award scraper"""

from typing import Optional


class ANAScraperError(Exception):
    """Base exception for scraper errors"""

    pass


class MissingCredentialsError(ANAScraperError):
    """Raised when the username or password is empty"""

    def __init__(self, message: str = "Missing login credentials"):
        super().__init__(message)


class LoginFailedError(ANAScraperError):
    """Raised when credentials were submitted but no session was established"""

    pass


class UnsupportedCabinClassError(ANAScraperError):
    """Raised when the award search flow does not offer the requested cabin"""

    def __init__(self, cabin):
        self.cabin = cabin
        super().__init__(f"Unsupported cabin class: {getattr(cabin, 'value', cabin)}")


class SiteProcessingError(ANAScraperError):
    """Raised when the website reports a user-facing error

    The site's own message is kept verbatim in ``site_message`` and the
    surface it was read from (modal dialog or message banner) in ``source``.
    """

    def __init__(self, site_message: str, source=None):
        self.site_message = site_message
        self.source = source
        super().__init__(
            f"The website encountered an error processing the request: {site_message}"
        )


class NavigationTimeoutError(ANAScraperError):
    """Raised when a bounded, non-optional wait on the page expires"""

    def __init__(
        self,
        message: str,
        selector: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.selector = selector
        self.url = url
        super().__init__(message)


class ResponseStatusError(ANAScraperError):
    """Raised when a navigation response carries a non-success status"""

    def __init__(self, status: int, url: str = "", status_text: str = ""):
        self.status = status
        self.url = url
        self.status_text = status_text
        detail = f" {status_text}" if status_text else ""
        super().__init__(f"Received bad status {status}{detail} from {url or 'page'}")
