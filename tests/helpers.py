from pathlib import Path
from typing import Iterable, Sequence, Tuple

import fitz
import httpx


class MockResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200, headers: dict | None = None):
        self.content = content
        self.status_code = status_code
        self.headers = httpx.Headers(headers or {})
        self.request = httpx.Request("GET", "https://mock")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                "mock error",
                request=self.request,
                response=httpx.Response(self.status_code, request=self.request),
            )


class MockAsyncClient:
    def __init__(self, response: MockResponse):
        self.response = response
        self.calls: list[tuple[str, dict]] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


class FailingAsyncClient(MockAsyncClient):
    def __init__(self, exc: Exception):
        super().__init__(MockResponse())
        self.exc = exc

    async def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        raise self.exc


def make_pdf(pages: Sequence[Iterable[Tuple[float, float, str]]], fontsize: float = 11) -> bytes:
    """
    Build a PDF where each page is a list of (x, baseline_y, text) placements.
    """
    doc = fitz.open()
    for placements in pages:
        page = doc.new_page(width=595, height=842)
        for x, y, text in placements:
            page.insert_text((x, y), text, fontsize=fontsize)
    data = doc.tobytes()
    doc.close()
    return data


def write_csv(path: Path, rows: Sequence[Sequence[str]], delimiter: str = ",") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(delimiter.join(row) for row in rows) + "\n", encoding="utf-8")
    return path
