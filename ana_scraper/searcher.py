"""Award search flow: fill the form, submit, capture each leg"""

from typing import Dict, List, Optional

from loguru import logger

from .airports import AirportDirectory
from .browser import check_response
from .capture import ResultCapture
from .config import (
    FLIGHT_RADIO_SELECTOR,
    FORM_HYDRATION_DELAY,
    LAYOUT_CHANGE_DELAY,
    MIXED_CABIN_SELECTOR,
    NEXT_BUTTON_SELECTOR,
    PRE_SUBMIT_DELAY,
    SEARCH_SUBMIT_SELECTOR,
    TRAVEL_ARRANGER_SELECTOR,
)
from .date_utils import format_display_date, format_form_date
from .error_detector import ErrorDetector
from .models import Leg, Query, SearchStage
from .pacing import DelayPolicy
from .settlement import PageSettlementMonitor


def build_form_fields(query: Query, directory: AirportDirectory) -> Dict[str, str]:
    """
    Map a query onto the multi-city form's fields.

    The form is filled as two segments: origin to destination, then back.
    Each airport code needs a matching display name (``_pctext``) for the
    site's autocomplete inputs; each date needs its display text.
    """
    depart = query.departure_date()
    back = query.return_or_departure_date()
    origin_name = directory.lookup_name(query.origin)
    destination_name = directory.lookup_name(query.destination)

    return {
        "requestedSegment:0:departureAirportCode:field": query.origin,
        "requestedSegment:1:arrivalAirportCode:field": query.origin,
        "requestedSegment:0:departureAirportCode:field_pctext": origin_name,
        "requestedSegment:1:arrivalAirportCode:field_pctext": origin_name,
        "requestedSegment:0:arrivalAirportCode:field": query.destination,
        "requestedSegment:1:departureAirportCode:field": query.destination,
        "requestedSegment:0:arrivalAirportCode:field_pctext": destination_name,
        "requestedSegment:1:departureAirportCode:field_pctext": destination_name,
        "requestedSegment:0:departureDate:field": format_form_date(depart),
        "requestedSegment:0:departureDate:field_pctext": format_display_date(depart),
        "requestedSegment:1:departureDate:field": format_form_date(back),
        "requestedSegment:1:departureDate:field_pctext": format_display_date(back),
        "adult:count": str(query.passengers),
        # Young adults and children are not searched by this flow
        "youngAdult:count": "0",
        "child:count": "0",
    }


class SearchOrchestrator:
    """
    Drives one award search on an already authenticated page.

    Any failure aborts the whole search; nothing is retried.
    """

    def __init__(
        self,
        browser,
        results,
        delay_policy: Optional[DelayPolicy] = None,
        settlement: Optional[PageSettlementMonitor] = None,
        detector: Optional[ErrorDetector] = None,
    ):
        self.browser = browser
        self.results = results
        self.delay_policy = delay_policy or DelayPolicy()
        self.settlement = settlement or PageSettlementMonitor(browser)
        self.detector = detector or ErrorDetector(browser)
        self.capture = ResultCapture(results, self.detector)

        self.stage = SearchStage.INIT
        self.directory: Optional[AirportDirectory] = None

    def _advance(self, stage: SearchStage) -> None:
        logger.debug(f"Search stage: {self.stage.value} → {stage.value}")
        self.stage = stage

    async def search(self, query: Query) -> List[Leg]:
        """
        Run the search and capture the result pages.

        Returns:
            Legs captured, in order
        """
        legs: List[Leg] = []
        trip = "one-way" if query.one_way else f"return {query.return_date}"
        logger.info(
            f"🔍 Searching {query.origin} → {query.destination} on {query.depart_date} "
            f"({trip}, {query.passengers} pax)"
        )

        try:
            await self._fill_form(query)
            await self._submit()

            await self.capture.save(Leg.OUTBOUND)
            legs.append(Leg.OUTBOUND)
            self._advance(SearchStage.OUTBOUND_CAPTURED)

            if not query.one_way and await self._select_outbound_flight():
                await self.capture.save(Leg.INBOUND)
                legs.append(Leg.INBOUND)
                self._advance(SearchStage.INBOUND_CAPTURED)
        except Exception:
            logger.error(f"Search failed during stage {self.stage.value}")
            self.stage = SearchStage.FAILED
            raise

        self._advance(SearchStage.DONE)
        return legs

    async def _fill_form(self, query: Query) -> None:
        browser = self.browser

        # Wait a little bit for the form to load
        await browser.delay(FORM_HYDRATION_DELAY)

        # Choose multiple cities / mixed classes
        await browser.click_and_wait(MIXED_CABIN_SELECTOR)
        await browser.delay(LAYOUT_CHANGE_DELAY)

        self.directory = await AirportDirectory.load(browser)
        await browser.fill_form(build_form_fields(query, self.directory))

        # Award availability has to reflect the logged-in member's own status
        if await browser.is_checked(TRAVEL_ARRANGER_SELECTOR):
            logger.debug("Unchecking travel arranger")
            await browser.click(TRAVEL_ARRANGER_SELECTOR)
        await browser.delay(PRE_SUBMIT_DELAY)

        self._advance(SearchStage.FORM_FILLED)

    async def _submit(self) -> None:
        response = await self.browser.click_and_wait(SEARCH_SUBMIT_SELECTOR)
        await self.settlement.settle()
        check_response(response)
        self._advance(SearchStage.SUBMITTED)

        # Airport names are needed to map results back to codes later
        await self.results.save_structured("airports", self.directory.to_payload())

    async def _select_outbound_flight(self) -> bool:
        """
        Pick an outbound flight and move on to the inbound results.

        Returns False when no selector is rendered. That covers both "no
        inbound flights" and an unrecognized layout; the page gives no way
        to tell them apart, so neither is treated as an error.
        """
        browser = self.browser

        if not await browser.exists(FLIGHT_RADIO_SELECTOR):
            logger.warning("No flight selector on results page, skipping inbound leg")
            return False

        self._advance(SearchStage.INBOUND_OFFERED)
        await browser.click(FLIGHT_RADIO_SELECTOR)
        await self.delay_policy.wait(browser)
        await browser.click_and_wait(NEXT_BUTTON_SELECTOR)
        await self.settlement.settle()
        return True


async def search(browser, query: Query, results, delay_policy: Optional[DelayPolicy] = None) -> List[Leg]:
    """Run one award search on an authenticated page"""
    orchestrator = SearchOrchestrator(browser, results, delay_policy=delay_policy)
    return await orchestrator.search(query)
