"""Run one award search end to end in a Camoufox browser"""

import time
from pathlib import Path
from typing import Optional

from loguru import logger

from .auth import SessionAuthenticator
from .browser import BrowserPage
from .config import DEFAULT_OUTPUT_DIR, SEARCH_URL
from .exceptions import LoginFailedError
from .models import Credentials, Query, SearchReport
from .pacing import DelayPolicy
from .searcher import SearchOrchestrator
from .settlement import PageSettlementMonitor
from .storage import ResultsSink, build_run_dir
from .validator import validate


class AwardSearchRunner:
    """
    Validates a query, opens a browser, authenticates and searches.

    Each ``run`` launches its own browser and page, so concurrent runs never
    share page state.
    """

    def __init__(
        self,
        credentials: Credentials,
        output_dir: Path = DEFAULT_OUTPUT_DIR,
        headless: bool = True,
        delay_policy: Optional[DelayPolicy] = None,
        search_url: str = SEARCH_URL,
    ):
        self.credentials = credentials
        self.output_dir = output_dir
        self.headless = headless
        self.delay_policy = delay_policy or DelayPolicy()
        self.search_url = search_url

    async def run(self, query: Query) -> SearchReport:
        # Reject bad queries before spending a browser launch on them
        validate(query)

        from camoufox.async_api import AsyncCamoufox

        start_time = time.monotonic()
        logger.info(f"🦊 Launching browser (headless={self.headless})")

        async with AsyncCamoufox(headless=self.headless) as browser:
            page = await browser.new_page()
            report = await self.run_on_page(BrowserPage(page), query)

        report.elapsed_seconds = time.monotonic() - start_time
        logger.success(
            f"✅ Search finished in {report.elapsed_seconds:.1f}s: "
            f"{', '.join(report.leg_names) or 'no legs'} captured"
        )
        return report

    async def run_on_page(self, browser: BrowserPage, query: Query) -> SearchReport:
        """Authenticate and search on a page the caller owns"""
        validate(query)

        settlement = PageSettlementMonitor(browser)
        await browser.navigate(self.search_url, wait_until="networkidle")

        await self.ensure_logged_in(browser, settlement)

        results = ResultsSink(browser, build_run_dir(self.output_dir, query))
        orchestrator = SearchOrchestrator(
            browser, results, delay_policy=self.delay_policy, settlement=settlement
        )
        legs = await orchestrator.search(query)
        await results.save_manifest(query, legs)

        return SearchReport(
            query=query,
            output_dir=results.run_dir,
            legs=legs,
            airport_count=len(orchestrator.directory) if orchestrator.directory else 0,
        )

    async def ensure_logged_in(self, browser: BrowserPage, settlement: PageSettlementMonitor) -> None:
        authenticator = SessionAuthenticator(
            browser, settlement=settlement, search_url=self.search_url
        )
        if await authenticator.check_logged_in():
            logger.info("Already logged in")
            return

        await authenticator.login(self.credentials)

        if not await authenticator.check_logged_in():
            raise LoginFailedError(
                f"Login for {self.credentials.username} did not produce an active session"
            )
        logger.success("✓ Logged in")
