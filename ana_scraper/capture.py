"""Persist the page state for a captured leg"""

from loguru import logger

from .error_detector import ErrorDetector
from .models import Leg


class ResultCapture:
    def __init__(self, results, detector: ErrorDetector):
        self.results = results
        self.detector = detector

    async def save(self, leg: Leg) -> None:
        """Check the page for errors, then save its HTML and a screenshot"""
        await self.detector.check_page()

        await self.results.save_raw_snapshot(leg.value)
        await self.results.save_screenshot(leg.value)
        logger.success(f"✓ Captured {leg.value} flights")
