"""Detect error dialogs and message banners on the page"""

from typing import Optional

from loguru import logger

from .config import (
    MESSAGE_AREA_SELECTOR,
    MESSAGE_DISMISS_SELECTOR,
    MODAL_ERROR_PHRASE,
    MODAL_ERROR_SELECTOR,
)
from .exceptions import SiteProcessingError
from .models import ErrorSignal, ErrorSource


class ErrorDetector:
    """Turns site-reported errors into SiteProcessingError"""

    def __init__(self, browser):
        self.browser = browser

    async def detect(self) -> Optional[ErrorSignal]:
        """
        Look for a site error on the current page.

        A message banner is dismissed as a side effect so it cannot block
        later clicks.
        """
        browser = self.browser

        if await browser.is_visible(MODAL_ERROR_SELECTOR):
            msg = await browser.read_text(MODAL_ERROR_SELECTOR, "")
            if MODAL_ERROR_PHRASE in msg.lower():
                return ErrorSignal(message=msg, source=ErrorSource.MODAL)
            logger.debug(f"Ignoring modal without error phrase: {msg[:80]!r}")

        if await browser.exists(MESSAGE_AREA_SELECTOR):
            msg = await browser.read_text(MESSAGE_AREA_SELECTOR, "")
            await browser.click(MESSAGE_DISMISS_SELECTOR)
            return ErrorSignal(message=msg, source=ErrorSource.BANNER)

        return None

    async def check_page(self) -> None:
        signal = await self.detect()
        if signal is not None:
            logger.error(f"Site reported an error ({signal.source.value}): {signal.message}")
            raise SiteProcessingError(signal.message, source=signal.source)
