import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pipeline.builder import build_datasets, write_build
from pipeline.csv_parser import parse_matrix
from pipeline.storage import DatasetStore, read_json, write_json_atomic

MATRIX = "Passport,AR,CL,US\nUS,visa free,visa free,-1\nAR,-1,90,eta\n"


class WriteJsonAtomicTests(unittest.TestCase):
    def test_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "data.json"
            write_json_atomic(path, {"nombre": "Japón"})
            self.assertEqual(read_json(path), {"nombre": "Japón"})
            self.assertIn("Japón", path.read_text(encoding="utf-8"))

    def test_failed_write_leaves_previous_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.json"
            write_json_atomic(path, {"version": 1})
            with patch("pipeline.storage.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    write_json_atomic(path, {"version": 2})
            self.assertEqual(read_json(path), {"version": 1})
            self.assertEqual(os.listdir(tmp), ["data.json"])

    def test_read_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(read_json(Path(tmp) / "missing.json"))


class DatasetStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        write_build(build_datasets(parse_matrix(MATRIX, min_columns=1)), self.dir)
        self.store = DatasetStore(self.dir, self.dir / "henley.json", self.dir / "henley.meta.json")

    def tearDown(self):
        self._tmp.cleanup()

    def test_index_and_origin(self):
        self.assertEqual(len(self.store.index().list), 2)
        self.assertEqual(self.store.get_by_key("US").slug_es, "estados-unidos")
        self.assertEqual(self.store.origin("AR").origin_name_es, "Argentina")
        self.assertIsNone(self.store.origin("ZZ"))

    def test_origin_rejects_path_traversal(self):
        self.assertIsNone(self.store.origin("../secret"))

    def test_origin_is_cached(self):
        first = self.store.origin("AR")
        (self.dir / "AR.json").unlink()
        self.assertIs(self.store.origin("AR"), first)

    def test_resolve_origin(self):
        entry, slug, redirected = self.store.resolve_origin("estados-unidos")
        self.assertEqual((entry.key, slug, redirected), ("US", "estados-unidos", False))
        entry, slug, redirected = self.store.resolve_origin("united-states")
        self.assertEqual((entry.key, slug, redirected), ("US", "estados-unidos", True))
        self.assertIsNone(self.store.resolve_origin("narnia"))

    def test_resolve_destination(self):
        data = self.store.origin("AR")
        dest, slug, redirected = DatasetStore.resolve_destination(data, "united-states")
        self.assertEqual((dest.key, slug, redirected), ("US", "estados-unidos", True))
        dest, slug, redirected = DatasetStore.resolve_destination(data, "chile")
        self.assertEqual((dest.requirement, redirected), ("90", False))
        self.assertIsNone(DatasetStore.resolve_destination(data, "argentina"))

    def test_missing_overlay_is_none(self):
        self.assertIsNone(self.store.henley())
        self.assertIsNone(self.store.henley_meta())

    def test_corrupt_overlay_is_ignored(self):
        (self.dir / "henley.json").write_text("{not json", encoding="utf-8")
        with self.assertLogs("pipeline.storage", level="WARNING"):
            self.assertIsNone(self.store.henley())

    def test_overlay_uses_camel_case_keys(self):
        payload = {
            "generatedAt": "2024-03-12T00:00:00Z",
            "sources": ["AR_visa_full.pdf"],
            "matrix": {"AR": {"US": {"requiresVisa": True, "pdfUpdatedAt": "2024-03-12"}}},
        }
        (self.dir / "henley.json").write_text(json.dumps(payload), encoding="utf-8")
        henley = self.store.henley()
        self.assertTrue(henley.matrix["AR"]["US"].requires_visa)
        self.assertEqual(henley.matrix["AR"]["US"].pdf_updated_at, "2024-03-12")

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = DatasetStore(Path(tmp))
            self.assertEqual(store.index().list, [])
            self.assertIsNone(store.resolve_origin("chile"))


if __name__ == "__main__":
    unittest.main()
