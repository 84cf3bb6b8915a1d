"""Boundary cleaning and validation for spin history records."""

from __future__ import annotations

import json
import math
import time
import uuid
from collections.abc import Callable, Iterable, Mapping
from numbers import Integral, Real
from pathlib import Path
from typing import Any

import pandas as pd

from spinlens.utils.logger import get_logger

from .models import Observation, is_symbol

logger = get_logger(__name__)

SYMBOL_ALIASES = ("symbol", "number")
COLUMN_ALIASES = {"number": "symbol", "value": "symbol", "ts": "timestamp"}


class DataValidationError(ValueError):
    """Raised when spin history data fails validation."""


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class HistoryLoader:
    """Turn raw history records into ordered ``Observation`` lists.

    Record order is kept as-is: it is the chronology the engine relies on,
    timestamps are never used to re-sort.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or _epoch_millis

    def sanitize(self, records: Iterable[Any]) -> list[Observation]:
        """Drop malformed records and fill missing ids and timestamps."""
        observations: list[Observation] = []
        dropped = 0
        for record in records:
            symbol = self._symbol_of(record)
            if symbol is None:
                dropped += 1
                continue
            observations.append(self._to_observation(record, symbol))

        if dropped:
            logger.warning("Dropped %d malformed history record(s).", dropped)
        return observations

    def validate(self, records: Iterable[Any]) -> list[Observation]:
        """Strict variant of ``sanitize``: any malformed record is an error."""
        materialized = list(records)
        invalid = [
            position for position, record in enumerate(materialized) if self._symbol_of(record) is None
        ]
        if invalid:
            raise DataValidationError(f"Records with missing or unknown symbols at positions: {invalid}")

        return [self._to_observation(record, self._symbol_of(record)) for record in materialized]

    def from_dataframe(self, dataframe: pd.DataFrame) -> list[Observation]:
        """Validate a history dataframe, keeping its row order."""
        normalized = self._normalize_columns(dataframe)
        if "symbol" not in normalized.columns:
            raise DataValidationError("Missing required column: 'symbol'")

        records = [
            {key: value for key, value in row.items() if not _is_missing(value)}
            for row in normalized.to_dict(orient="records")
        ]
        return self.validate(records)

    def load_csv(self, path: str | Path, encoding: str = "utf-8") -> list[Observation]:
        """Read a CSV history export with id/symbol/timestamp columns."""
        csv_path = Path(path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        dataframe = pd.read_csv(csv_path, encoding=encoding)
        return self.from_dataframe(dataframe)

    def load_json(self, path: str | Path, encoding: str = "utf-8") -> list[Observation]:
        """Read a JSON export (``{"history": [...]}`` or a bare list) and sanitize it."""
        json_path = Path(path)
        if not json_path.exists():
            raise FileNotFoundError(f"JSON file not found: {json_path}")

        with json_path.open("r", encoding=encoding) as file:
            try:
                parsed = json.load(file)
            except json.JSONDecodeError as exc:
                raise DataValidationError(f"Invalid JSON in {json_path}: {exc}") from exc

        if isinstance(parsed, Mapping):
            parsed = parsed.get("history")
        if not isinstance(parsed, list):
            raise DataValidationError("JSON history must be a list or an object with a 'history' list.")
        return self.sanitize(parsed)

    @staticmethod
    def _symbol_of(record: Any) -> int | None:
        if isinstance(record, Observation):
            return record.symbol if is_symbol(record.symbol) else None
        if not isinstance(record, Mapping):
            return None
        for key in SYMBOL_ALIASES:
            value = record.get(key)
            if value is not None:
                return int(value) if is_symbol(value) else None
        return None

    def _to_observation(self, record: Any, symbol: int) -> Observation:
        if isinstance(record, Observation):
            return record

        timestamp = _whole_millis(record.get("timestamp"))
        if timestamp is None:
            timestamp = self._clock()

        raw_id = record.get("id")
        if raw_id is None or raw_id == "":
            identifier = f"{timestamp}-{uuid.uuid4().hex}"
        else:
            identifier = str(raw_id)

        return Observation(id=identifier, symbol=symbol, timestamp=timestamp)

    @staticmethod
    def _normalize_columns(dataframe: pd.DataFrame) -> pd.DataFrame:
        normalized = {}
        for column in dataframe.columns:
            new_name = str(column).strip().lower()
            normalized[column] = COLUMN_ALIASES.get(new_name, new_name)
        return dataframe.rename(columns=normalized)


def _whole_millis(value: Any) -> int | None:
    """Integral timestamp, or None for bools, fractions, NaN and infinities."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    return None


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
