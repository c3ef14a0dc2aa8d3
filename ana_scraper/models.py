"""Data models and enums for the ANA award scraper"""

import os
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import List, Optional


class CabinClass(Enum):
    """Cabin classes a query can ask for"""

    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium_economy"
    BUSINESS = "business"
    FIRST = "first"


class SessionState(Enum):
    """Login state inferred from the current page"""

    LOGGED_OUT = "logged_out"
    STALE_SESSION = "stale_session"  # Saved AMC number prefilled, no active session
    LOGGED_IN = "logged_in"


class Leg(Enum):
    """Itinerary legs captured by a search"""

    OUTBOUND = "outbound"
    INBOUND = "inbound"


class ErrorSource(Enum):
    """Page surface an error message was read from"""

    MODAL = "modal"
    BANNER = "banner"


class SearchStage(Enum):
    """Progress of the search state machine"""

    INIT = "init"
    FORM_FILLED = "form_filled"
    SUBMITTED = "submitted"
    OUTBOUND_CAPTURED = "outbound_captured"
    INBOUND_OFFERED = "inbound_offered"
    INBOUND_CAPTURED = "inbound_captured"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Query:
    """A single award search request"""

    origin: str
    destination: str
    depart_date: date
    return_date: Optional[date] = None
    one_way: bool = False
    passengers: int = 1
    cabin: CabinClass = CabinClass.ECONOMY

    def __post_init__(self):
        origin = self.origin.strip().upper()
        destination = self.destination.strip().upper()
        for label, code in (("origin", origin), ("destination", destination)):
            if len(code) != 3 or not code.isalpha():
                raise ValueError(f"Invalid {label} airport code: {code!r}")
        if origin == destination:
            raise ValueError("Origin and destination must differ")
        if self.passengers < 1:
            raise ValueError(f"Passenger count must be at least 1, got {self.passengers}")
        if not self.one_way:
            if self.return_date is None:
                raise ValueError("Round-trip queries need a return date")
            if self.return_date < self.depart_date:
                raise ValueError(
                    f"Return date {self.return_date} is before departure date {self.depart_date}"
                )

        # Frozen dataclass: normalized codes have to go through object.__setattr__
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "destination", destination)

    def departure_date(self) -> date:
        return self.depart_date

    def return_or_departure_date(self) -> date:
        """Date for the second form segment (one-way searches reuse the departure)"""
        if self.one_way or self.return_date is None:
            return self.depart_date
        return self.return_date


@dataclass(frozen=True)
class Credentials:
    """Mileage club login"""

    username: str
    password: str = field(repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)

    @classmethod
    def from_env(cls) -> "Credentials":
        from .config import PASSWORD_ENV_VAR, USERNAME_ENV_VAR

        return cls(
            username=os.environ.get(USERNAME_ENV_VAR, ""),
            password=os.environ.get(PASSWORD_ENV_VAR, ""),
        )


@dataclass(frozen=True)
class ErrorSignal:
    """Error message extracted from the page"""

    message: str
    source: ErrorSource


@dataclass
class SearchReport:
    """Summary of a completed search run"""

    query: Query
    output_dir: Path
    legs: List[Leg] = field(default_factory=list)
    airport_count: int = 0
    elapsed_seconds: float = 0.0

    @property
    def leg_names(self) -> List[str]:
        return [leg.value for leg in self.legs]
