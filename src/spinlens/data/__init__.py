"""History records and boundary validation."""

from .loader import DataValidationError, HistoryLoader
from .models import SYMBOLS, Observation, is_symbol

__all__ = [
    "DataValidationError",
    "HistoryLoader",
    "Observation",
    "SYMBOLS",
    "is_symbol",
]
