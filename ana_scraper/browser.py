"""Thin async facade over a Playwright page

Every wait here is bounded. Playwright's TimeoutError is translated into
NavigationTimeoutError; all other Playwright errors (including a page closed
underneath us) propagate as-is.
"""

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Page, Response
from playwright.async_api import TimeoutError as PlaywrightTimeout

from .config import ACTION_TIMEOUT, KEYSTROKE_DELAY, NAVIGATION_TIMEOUT
from .exceptions import NavigationTimeoutError, ResponseStatusError

FILL_FORM_SCRIPT = """
(values) => {
  const missing = [];
  for (const [key, value] of Object.entries(values)) {
    const el = document.getElementById(key) || document.getElementsByName(key)[0];
    if (!el) {
      missing.push(key);
      continue;
    }
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
  }
  return missing;
}
"""


class BrowserPage:
    """
    Browser interaction primitives used by the search flow.

    Owns nothing: the caller opens and closes the underlying page. One
    instance drives exactly one page, sequentially.
    """

    def __init__(
        self,
        page: Page,
        navigation_timeout: int = NAVIGATION_TIMEOUT,
        action_timeout: int = ACTION_TIMEOUT,
    ):
        self.page = page
        self.navigation_timeout = navigation_timeout
        self.action_timeout = action_timeout
        self.last_response: Optional[Response] = None

    @property
    def url(self) -> str:
        return self.page.url

    async def navigate(self, url: str, wait_until: str = "networkidle") -> Optional[Response]:
        logger.debug(f"Navigating to {url} (wait_until={wait_until})")
        try:
            response = await self.page.goto(
                url, wait_until=wait_until, timeout=self.navigation_timeout
            )
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(
                f"Timed out loading {url} after {self.navigation_timeout}ms", url=url
            ) from e
        self.last_response = response
        return response

    async def wait_for_visible(self, selector: str, timeout: Optional[int] = None) -> None:
        await self._wait_for(selector, "visible", timeout)

    async def wait_for_hidden(self, selector: str, timeout: Optional[int] = None) -> None:
        await self._wait_for(selector, "hidden", timeout)

    async def _wait_for(self, selector: str, state: str, timeout: Optional[int]) -> None:
        timeout = self.action_timeout if timeout is None else timeout
        try:
            await self.page.wait_for_selector(selector, state=state, timeout=timeout)
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(
                f"Timed out after {timeout}ms waiting for {selector} to be {state}",
                selector=selector,
                url=self.page.url,
            ) from e

    async def click(self, selector: str) -> None:
        try:
            await self.page.click(selector, timeout=self.action_timeout)
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(
                f"Timed out clicking {selector}", selector=selector, url=self.page.url
            ) from e

    async def click_and_wait(
        self, selector: str, wait_until: str = "networkidle"
    ) -> Optional[Response]:
        """Click an element and wait for the navigation it triggers to finish"""
        try:
            async with self.page.expect_navigation(
                wait_until=wait_until, timeout=self.navigation_timeout
            ) as navigation:
                await self.page.click(selector, timeout=self.action_timeout)
            response = await navigation.value
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(
                f"Navigation after clicking {selector} did not complete "
                f"within {self.navigation_timeout}ms",
                selector=selector,
                url=self.page.url,
            ) from e
        self.last_response = response
        return response

    async def type_text(self, selector: str, text: str, delay: int = KEYSTROKE_DELAY) -> None:
        await self.page.locator(selector).first.press_sequentially(
            text, delay=delay, timeout=self.action_timeout
        )

    async def clear_field(self, selector: str) -> None:
        await self.page.fill(selector, "", timeout=self.action_timeout)

    async def exists(self, selector: str) -> bool:
        return await self.page.query_selector(selector) is not None

    async def is_visible(self, selector: str) -> bool:
        return await self.page.locator(selector).first.is_visible()

    async def is_checked(self, selector: str) -> bool:
        return await self.exists(f"{selector}:checked")

    async def read_text(self, selector: str, default: str = "") -> str:
        handle = await self.page.query_selector(selector)
        if handle is None:
            return default
        text = await handle.text_content()
        return text.strip() if text else default

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self.page.evaluate(expression, arg)

    async def fill_form(self, values: Dict[str, str]) -> List[str]:
        """
        Assign form values in one in-page pass.

        Returns:
            Field identifiers that were not found on the page
        """
        missing = await self.page.evaluate(FILL_FORM_SCRIPT, values)
        if missing:
            logger.warning(f"Form fields not found on page: {', '.join(missing)}")
        return missing

    async def delay(self, ms: float) -> None:
        await self.page.wait_for_timeout(ms)

    async def content(self) -> str:
        return await self.page.content()

    async def screenshot(self, path) -> None:
        await self.page.screenshot(path=str(path), full_page=True)


def check_response(response: Optional[Response]) -> None:
    """
    Raise ResponseStatusError when a navigation response is not 2xx.

    Playwright returns no response for same-document navigations; that is
    logged and accepted.
    """
    if response is None:
        logger.warning("No navigation response to check (same-document navigation?)")
        return
    if not response.ok:
        raise ResponseStatusError(response.status, response.url, response.status_text)
    logger.debug(f"Response OK: {response.status} {response.url}")
