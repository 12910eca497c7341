"""Saved calculations, persisted as one JSON value in a key-value store.

Any object with get(key) -> str | None and set(key, value) works as the
store; the app uses db.SqliteStore and tests use MemoryStore.
"""
import json
import logging
from collections import namedtuple
from datetime import datetime

from config import STORAGE_KEY
from helpers import now_ms
from interest import CalculationResult
from validation import INPUT_FIELDS

logger = logging.getLogger(__name__)


class SavedCalculation(namedtuple(
    "SavedCalculation", ["id", "timestamp", "inputs", "result", "name"]
)):
    __slots__ = ()

    def to_dict(self):
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "inputs": dict(self.inputs),
            "result": self.result.to_dict(),
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, d):
        inputs = d["inputs"]
        return cls(
            id=str(d["id"]),
            timestamp=int(d["timestamp"]),
            inputs={field: str(inputs[field]) for field in INPUT_FIELDS},
            result=CalculationResult.from_dict(d["result"]),
            name=str(d["name"]),
        )


class MemoryStore:
    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


def dumps_collection(calculations):
    return json.dumps([c.to_dict() for c in calculations], ensure_ascii=False)


def loads_collection(raw):
    """Parse a stored collection. Raises ValueError on anything malformed."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("saved calculations must be a JSON list")
    try:
        return [SavedCalculation.from_dict(item) for item in data]
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed saved calculation: {exc}") from exc


def default_name(now=None):
    now = now or datetime.now()
    return f"Calculation {now.strftime('%Y-%m-%d')}"


class SavedCalculations:
    """Ordered collection of saved calculations backed by `store`.

    Read once on construction; every add/delete writes the whole list back.
    """

    def __init__(self, store, key=STORAGE_KEY):
        self.store = store
        self.key = key
        self._items = self._load()

    def _load(self):
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            return loads_collection(raw)
        except ValueError:
            logger.warning("Discarding unreadable saved calculations under %r", self.key)
            return []

    def _persist(self):
        self.store.set(self.key, dumps_collection(self._items))

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def all(self):
        return list(self._items)

    def get(self, calc_id):
        for calc in self._items:
            if calc.id == calc_id:
                return calc
        return None

    def _unique_id(self, timestamp):
        taken = {c.id for c in self._items}
        candidate = timestamp
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def add(self, inputs, result, name, timestamp=None):
        timestamp = now_ms() if timestamp is None else timestamp
        calc = SavedCalculation(
            id=self._unique_id(timestamp),
            timestamp=timestamp,
            inputs={field: str(inputs.get(field, "")) for field in INPUT_FIELDS},
            result=result,
            name=name,
        )
        self._items.append(calc)
        self._persist()
        logger.info("Saved calculation %s (%s)", calc.id, calc.name)
        return calc

    def delete(self, calc_id):
        """Remove by id; returns False when nothing matched."""
        remaining = [c for c in self._items if c.id != calc_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._persist()
        logger.info("Deleted calculation %s", calc_id)
        return True
