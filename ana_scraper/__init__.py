"""ANA Award Flight Scraper
Browser-driven award search with raw result capture
"""

__version__ = "0.1.0"

from .airports import AirportDirectory
from .auth import SessionAuthenticator
from .browser import BrowserPage, check_response
from .capture import ResultCapture
from .error_detector import ErrorDetector
from .exceptions import (
    ANAScraperError,
    LoginFailedError,
    MissingCredentialsError,
    NavigationTimeoutError,
    ResponseStatusError,
    SiteProcessingError,
    UnsupportedCabinClassError,
)
from .models import (
    CabinClass,
    Credentials,
    ErrorSignal,
    ErrorSource,
    Leg,
    Query,
    SearchReport,
    SearchStage,
    SessionState,
)
from .pacing import DelayPolicy
from .runner import AwardSearchRunner
from .searcher import SearchOrchestrator, build_form_fields, search
from .settlement import PageSettlementMonitor
from .storage import ResultsSink
from .validator import validate

__all__ = [
    "__version__",
    "AirportDirectory",
    "AwardSearchRunner",
    "BrowserPage",
    "check_response",
    "DelayPolicy",
    "ErrorDetector",
    "PageSettlementMonitor",
    "ResultCapture",
    "ResultsSink",
    "SearchOrchestrator",
    "SessionAuthenticator",
    "build_form_fields",
    "search",
    "validate",
    "ANAScraperError",
    "LoginFailedError",
    "MissingCredentialsError",
    "NavigationTimeoutError",
    "ResponseStatusError",
    "SiteProcessingError",
    "UnsupportedCabinClassError",
    "CabinClass",
    "Credentials",
    "ErrorSignal",
    "ErrorSource",
    "Leg",
    "Query",
    "SearchReport",
    "SearchStage",
    "SessionState",
]
