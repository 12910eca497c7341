import json
import os
import tempfile
import unittest

import db
import storage
from config import STORAGE_KEY
from interest import calculate
from storage import (
    MemoryStore, SavedCalculations, default_name, dumps_collection, loads_collection,
)

INPUTS = {
    "principal": "100000",
    "interestRate": "3",
    "startDate": "2078-01-01",
    "endDate": "2080-04-05",
}


def _result():
    return calculate(100000, 3, "2078-01-01", "2080-04-05")


class SavedCalculationsTests(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()

    def test_empty_store_gives_empty_collection(self):
        saved = SavedCalculations(self.store)
        self.assertEqual(len(saved), 0)
        self.assertEqual(saved.all(), [])

    def test_add_persists_whole_collection(self):
        saved = SavedCalculations(self.store)
        first = saved.add(INPUTS, _result(), "Loan A", timestamp=1_700_000_000_000)
        saved.add(INPUTS, _result(), "Loan B", timestamp=1_700_000_000_500)

        self.assertEqual(first.id, "1700000000000")
        stored = json.loads(self.store.get(STORAGE_KEY))
        self.assertEqual([c["name"] for c in stored], ["Loan A", "Loan B"])
        self.assertEqual(stored[0]["inputs"], INPUTS)
        self.assertEqual(stored[0]["result"]["finalAmount"], 202346.24)

    def test_reload_reads_saved_items(self):
        saved = SavedCalculations(self.store)
        calc = saved.add(INPUTS, _result(), "Loan A", timestamp=1_700_000_000_000)

        reloaded = SavedCalculations(self.store)
        self.assertEqual(reloaded.all(), [calc])
        self.assertEqual(reloaded.get(calc.id).result, _result())

    def test_colliding_timestamps_get_distinct_ids(self):
        saved = SavedCalculations(self.store)
        a = saved.add(INPUTS, _result(), "A", timestamp=42)
        b = saved.add(INPUTS, _result(), "B", timestamp=42)
        self.assertEqual(a.id, "42")
        self.assertEqual(b.id, "43")

    def test_delete(self):
        saved = SavedCalculations(self.store)
        a = saved.add(INPUTS, _result(), "A", timestamp=1)
        b = saved.add(INPUTS, _result(), "B", timestamp=2)

        self.assertTrue(saved.delete(a.id))
        self.assertFalse(saved.delete("missing"))
        self.assertEqual(saved.all(), [b])
        self.assertEqual(SavedCalculations(self.store).all(), [b])

    def test_malformed_data_is_discarded(self):
        for raw in ("not json", "{}", '[{"id": "1"}]', "[1, 2]"):
            with self.subTest(raw=raw):
                store = MemoryStore({STORAGE_KEY: raw})
                with self.assertLogs(storage.logger, level="WARNING"):
                    saved = SavedCalculations(store)
                self.assertEqual(saved.all(), [])

    def test_round_trip_is_identity(self):
        saved = SavedCalculations(self.store)
        saved.add(INPUTS, _result(), "A", timestamp=10)
        saved.add(dict(INPUTS, interestRate="12"),
                  calculate(100000, 12, "2078-01-01", "2080-04-05"), "B", timestamp=5)

        items = saved.all()
        self.assertEqual(loads_collection(dumps_collection(items)), items)

    def test_default_name(self):
        from datetime import datetime
        self.assertEqual(default_name(datetime(2025, 1, 2)), "Calculation 2025-01-02")


class SqliteStoreTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

        self._orig_db_path = db.DB_PATH
        self.addCleanup(setattr, db, "DB_PATH", self._orig_db_path)
        db.DB_PATH = os.path.join(self.tmpdir.name, "test_store.db")

    def test_get_missing_key_returns_none(self):
        self.assertIsNone(db.SqliteStore().get("nothing"))

    def test_saved_calculations_survive_new_store(self):
        saved = SavedCalculations(db.SqliteStore())
        calc = saved.add(INPUTS, _result(), "Persisted", timestamp=99)

        reloaded = SavedCalculations(db.SqliteStore())
        self.assertEqual(reloaded.all(), [calc])


if __name__ == "__main__":
    unittest.main()
