"""Wait for the page's asynchronous work to finish"""

from loguru import logger

from .config import (
    LOADING_SELECTOR,
    SETTLE_GRACE_DELAY,
    SPINNER_APPEAR_TIMEOUT,
    SPINNER_HIDDEN_TIMEOUT,
)
from .exceptions import NavigationTimeoutError


class PageSettlementMonitor:
    """
    Blocks until the loading indicator is gone, plus a short grace delay.

    Call ``settle`` after every state-changing interaction (login, search
    submit, leg advance) before the page is read or written again.
    """

    def __init__(
        self,
        browser,
        loading_selector: str = LOADING_SELECTOR,
        appear_timeout: int = SPINNER_APPEAR_TIMEOUT,
        hidden_timeout: int = SPINNER_HIDDEN_TIMEOUT,
        grace_delay: int = SETTLE_GRACE_DELAY,
    ):
        self.browser = browser
        self.loading_selector = loading_selector
        self.appear_timeout = appear_timeout
        self.hidden_timeout = hidden_timeout
        self.grace_delay = grace_delay

    async def settle(self) -> None:
        # The spinner may never show up; that is fine
        try:
            await self.browser.wait_for_visible(self.loading_selector, self.appear_timeout)
            logger.debug("Loading indicator visible, waiting for it to clear...")
        except NavigationTimeoutError:
            pass

        # Still spinning after the bound is a real failure
        await self.browser.wait_for_hidden(self.loading_selector, self.hidden_timeout)

        await self.browser.delay(self.grace_delay)
