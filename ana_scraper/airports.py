"""Airport directory read from the search page"""

from typing import Any, Dict, List

from loguru import logger

from .config import AIRPORT_LIST_SCRIPT


class AirportDirectory:
    """
    Code to name lookup over the site's pre-loaded airport list.

    The search page ships the list as a page global. It is read once per
    search with ``load`` and reused for every lookup after that.
    """

    def __init__(self, airports: List[Dict[str, Any]]):
        self.airports = airports
        self._names: Dict[str, str] = {}
        for airport in airports:
            code = airport.get("code")
            if code:
                # First entry wins when the site lists a code twice
                self._names.setdefault(code, airport.get("name") or "")

    @classmethod
    async def load(cls, browser) -> "AirportDirectory":
        raw = await browser.evaluate(AIRPORT_LIST_SCRIPT)
        if not isinstance(raw, list):
            logger.warning(f"Airport list missing from page (got {type(raw).__name__})")
            raw = []
        airports = [a for a in raw if isinstance(a, dict)]
        logger.debug(f"Loaded {len(airports)} airports from page")
        return cls(airports)

    def lookup_name(self, code: str) -> str:
        """Display name for an airport code, or an empty string if unknown"""
        name = self._names.get(code.upper(), "")
        if not name:
            logger.warning(f"No airport name found for {code}")
        return name

    def to_payload(self) -> Dict[str, Any]:
        return {"airports": self.airports}

    def __len__(self) -> int:
        return len(self.airports)

    def __contains__(self, code: str) -> bool:
        return code.upper() in self._names
