"""Query validation, run before any browser interaction"""

from .config import SUPPORTED_CABINS
from .exceptions import UnsupportedCabinClassError
from .models import Query


def validate(query: Query) -> None:
    """Reject queries the award booking flow cannot serve"""
    if query.cabin not in SUPPORTED_CABINS:
        raise UnsupportedCabinClassError(query.cabin)
