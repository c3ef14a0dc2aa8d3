"""Mileage club session detection and login"""

import asyncio

from loguru import logger

from .config import (
    ACCOUNT_NUMBER_SELECTOR,
    KEYSTROKE_DELAY,
    LOGIN_PROBE_TIMEOUT,
    LOGIN_SUBMIT_SELECTOR,
    LOGIN_VALIDATION_DELAY,
    LOGOUT_LINK_SELECTOR,
    LOGOUT_SELECTOR,
    PASSWORD_SELECTOR,
    REMEMBER_LOGIN_SELECTOR,
    SEARCH_URL,
)
from .exceptions import MissingCredentialsError, NavigationTimeoutError
from .models import Credentials, SessionState
from .settlement import PageSettlementMonitor


class SessionAuthenticator:
    """
    Determines login state and submits credentials.

    Session state is never cached: the site can change it behind our back
    (a remembered membership number prefills the form without an active
    session), so every check probes the live page.
    """

    def __init__(
        self,
        browser,
        settlement: PageSettlementMonitor = None,
        search_url: str = SEARCH_URL,
        probe_timeout: int = LOGIN_PROBE_TIMEOUT,
    ):
        self.browser = browser
        self.settlement = settlement or PageSettlementMonitor(browser)
        self.search_url = search_url
        self.probe_timeout = probe_timeout

    async def _wait_quietly(self, selector: str) -> bool:
        try:
            await self.browser.wait_for_visible(selector, self.probe_timeout)
            return True
        except NavigationTimeoutError:
            return False

    async def probe_session_state(self) -> SessionState:
        """Classify the current page as logged out, stale or logged in"""
        # Whichever indicator shows up first wins; the page may show neither
        waits = [
            asyncio.ensure_future(self._wait_quietly(LOGOUT_SELECTOR)),
            asyncio.ensure_future(self._wait_quietly(ACCOUNT_NUMBER_SELECTOR)),
        ]
        done, pending = await asyncio.wait(waits, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if not await self.browser.exists(LOGOUT_SELECTOR):
            state = SessionState.LOGGED_OUT
        elif await self.browser.is_visible(PASSWORD_SELECTOR):
            state = SessionState.STALE_SESSION
        else:
            state = SessionState.LOGGED_IN

        logger.debug(f"Session state: {state.value}")
        return state

    async def check_logged_in(self) -> bool:
        state = await self.probe_session_state()

        if state is SessionState.STALE_SESSION:
            # Saved AMC number may belong to someone else, start over
            logger.info("Half-authenticated session found, logging out...")
            await self.browser.click_and_wait(LOGOUT_LINK_SELECTOR)
            await self.browser.navigate(self.search_url, wait_until="networkidle")
            return False

        return state is SessionState.LOGGED_IN

    async def login(self, credentials: Credentials) -> None:
        """
        Submit credentials and wait for the resulting navigation.

        Raises:
            MissingCredentialsError: If username or password is empty
            NavigationTimeoutError: If the post-login navigation never completes
        """
        if not credentials.is_complete:
            raise MissingCredentialsError()

        browser = self.browser
        logger.info(f"Logging in as {credentials.username}...")

        await browser.click(ACCOUNT_NUMBER_SELECTOR)
        await browser.clear_field(ACCOUNT_NUMBER_SELECTOR)
        await browser.type_text(ACCOUNT_NUMBER_SELECTOR, credentials.username, KEYSTROKE_DELAY)
        await browser.click(PASSWORD_SELECTOR)
        await browser.clear_field(PASSWORD_SELECTOR)
        await browser.type_text(PASSWORD_SELECTOR, credentials.password, KEYSTROKE_DELAY)

        await browser.click(REMEMBER_LOGIN_SELECTOR)
        await browser.delay(LOGIN_VALIDATION_DELAY)
        await browser.click_and_wait(LOGIN_SUBMIT_SELECTOR)
        await self.settlement.settle()

        logger.success("✓ Login submitted")
