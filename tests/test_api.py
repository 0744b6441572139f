import inspect
import json
import tempfile
import unittest
from pathlib import Path

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import Settings
from pipeline.builder import build_datasets, write_build
from pipeline.csv_parser import parse_matrix

MATRIX = (
    "Passport,AR,CL,US,JP\n"
    "CL,90,-1,eta,visa free\n"
    "US,visa free,visa free,-1,visa free\n"
)

HENLEY = {
    "generatedAt": "2024-03-12T00:00:00Z",
    "sources": ["CL_visa_full.pdf"],
    "matrix": {"CL": {"JP": {"requiresVisa": False, "pdfUpdatedAt": "2024-03-12"}}},
}


class ApiTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        tmp = Path(self._tmp.name)
        write_build(build_datasets(parse_matrix(MATRIX, min_columns=1)), tmp / "generated")
        (tmp / "henley.json").write_text(json.dumps(HENLEY), encoding="utf-8")
        settings = Settings(
            generated_dir=tmp / "generated",
            henley_output=tmp / "henley.json",
            henley_meta=tmp / "henley.meta.json",
            admin_key="secret",
            site_base_url="https://visa.example",
        )
        self.client = TestClient(create_app(settings))

    def tearDown(self):
        self._tmp.cleanup()

    def test_origin_list(self):
        for path in ["/", "/visa"]:
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200)
            slugs = [origin["slug_es"] for origin in resp.json()["origins"]]
            self.assertEqual(slugs, ["chile", "estados-unidos"])
        self.assertIsNotNone(resp.json()["henley_freshness"])

    def test_origin_page(self):
        resp = self.client.get("/visa/chile")
        self.assertEqual(resp.status_code, 200)
        rows = {row["slug_es"]: row for row in resp.json()["destinations"]}
        self.assertEqual(rows["argentina"]["requirement"]["type"], "NO_VISA_DAYS")
        self.assertEqual(rows["estados-unidos"]["requirement"]["type"], "ETA")
        self.assertTrue(rows["estados-unidos"]["special"])
        self.assertNotIn("chile", rows)

    def test_legacy_origin_slug_redirects(self):
        resp = self.client.get("/visa/united-states", follow_redirects=False)
        self.assertEqual(resp.status_code, 301)
        self.assertEqual(resp.headers["location"], "/visa/estados-unidos")

    def test_legacy_origin_slug_redirects_detail(self):
        resp = self.client.get("/visa/united-states/japon", follow_redirects=False)
        self.assertEqual(resp.status_code, 301)
        self.assertEqual(resp.headers["location"], "/visa/estados-unidos/japon")

    def test_legacy_destination_slug_redirects(self):
        resp = self.client.get("/visa/chile/united-states", follow_redirects=False)
        self.assertEqual(resp.status_code, 301)
        self.assertEqual(resp.headers["location"], "/visa/chile/estados-unidos")

    def test_detail_page(self):
        resp = self.client.get("/visa/chile/estados-unidos")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["requirement"]["type"], "ETA")
        self.assertTrue(body["needs_visa"])
        self.assertIn("autorización electrónica", body["explanation"])
        self.assertGreaterEqual(len(body["faq"]), 4)
        self.assertEqual(body["curated"]["alt_permit"], "ESTA")
        self.assertIn(body["verification"], ["verified", "pending", "outdated"])

    def test_detail_applies_henley_overlay(self):
        body = self.client.get("/visa/chile/japon").json()
        self.assertFalse(body["curated"]["visa_required"])
        self.assertEqual(body["curated"]["last_reviewed"], "2024-03-12")

    def test_unknown_pages(self):
        self.assertEqual(self.client.get("/visa/narnia").status_code, 404)
        self.assertEqual(self.client.get("/visa/chile/narnia").status_code, 404)
        self.assertEqual(self.client.get("/visa/chile/chile").status_code, 404)

    def test_admin_requires_key(self):
        self.assertEqual(self.client.get("/admin").status_code, 404)
        self.assertEqual(self.client.get("/admin", params={"key": "wrong"}).status_code, 404)

        resp = self.client.get("/admin", params={"key": "secret"})
        self.assertEqual(resp.status_code, 200)
        counters = resp.json()["counters"]
        self.assertEqual(counters["total"], 50)
        self.assertEqual(counters["verified"] + counters["pending"] + counters["outdated"], 50)

    def test_handlers_run_in_threadpool(self):
        routes = [route for route in self.client.app.routes if isinstance(route, APIRoute)]
        self.assertTrue(routes)
        for route in routes:
            with self.subTest(path=route.path):
                self.assertFalse(inspect.iscoroutinefunction(route.endpoint))

    def test_robots(self):
        resp = self.client.get("/robots.txt")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Disallow: /admin", resp.text)
        self.assertIn("Sitemap: https://visa.example/sitemap.xml", resp.text)

    def test_sitemap(self):
        resp = self.client.get("/sitemap.xml")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("application/xml", resp.headers["content-type"])
        self.assertIn("<loc>https://visa.example/visa/chile/estados-unidos</loc>", resp.text)
        self.assertNotIn("/admin", resp.text)


if __name__ == "__main__":
    unittest.main()
