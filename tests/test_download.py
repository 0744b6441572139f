import unittest
from unittest.mock import patch

import httpx

from henley.download import DownloadedPdf, fetch_pdf, pdf_url
from henley.errors import HenleyDownloadError
from tests.helpers import FailingAsyncClient, MockAsyncClient, MockResponse


class PdfUrlTests(unittest.TestCase):
    def test_builds_cdn_url(self):
        self.assertEqual(
            pdf_url("https://cdn.henleyglobal.com/storage/app/media/HPI/", "cl"),
            "https://cdn.henleyglobal.com/storage/app/media/HPI/CL_visa_full.pdf",
        )


class LastModifiedDateTests(unittest.TestCase):
    def test_http_date_becomes_iso_day(self):
        pdf = DownloadedPdf(url="u", content=b"x", last_modified="Tue, 12 Mar 2024 23:30:00 GMT")
        self.assertEqual(pdf.last_modified_date, "2024-03-12")

    def test_missing_or_malformed_header(self):
        self.assertIsNone(DownloadedPdf(url="u", content=b"x").last_modified_date)
        self.assertIsNone(DownloadedPdf(url="u", content=b"x", last_modified="yesterday").last_modified_date)


class FetchPdfTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_content_and_last_modified(self):
        response = MockResponse(b"%PDF-1.7", headers={"Last-Modified": "Tue, 12 Mar 2024 10:00:00 GMT"})
        client = MockAsyncClient(response)
        with patch("henley.download.httpx.AsyncClient", return_value=client):
            result = await fetch_pdf("https://example.test/AR_visa_full.pdf", timeout=5)

        self.assertEqual(result.content, b"%PDF-1.7")
        self.assertEqual(result.last_modified, "Tue, 12 Mar 2024 10:00:00 GMT")
        self.assertEqual(client.calls, [("https://example.test/AR_visa_full.pdf", {"follow_redirects": True})])

    async def test_http_error_status(self):
        with patch("henley.download.httpx.AsyncClient", return_value=MockAsyncClient(MockResponse(status_code=404))):
            with self.assertRaises(HenleyDownloadError):
                await fetch_pdf("https://example.test/XX_visa_full.pdf")

    async def test_transport_error(self):
        client = FailingAsyncClient(httpx.ConnectTimeout("timed out"))
        with patch("henley.download.httpx.AsyncClient", return_value=client):
            with self.assertRaises(HenleyDownloadError):
                await fetch_pdf("https://example.test/AR_visa_full.pdf")

    async def test_empty_body(self):
        with patch("henley.download.httpx.AsyncClient", return_value=MockAsyncClient(MockResponse(b""))):
            with self.assertRaises(HenleyDownloadError):
                await fetch_pdf("https://example.test/AR_visa_full.pdf")


if __name__ == "__main__":
    unittest.main()
