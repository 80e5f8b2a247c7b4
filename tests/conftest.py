from __future__ import annotations

from typing import Callable, Optional

import pytest
import requests


GALLERY_BASE = "img-pr-002178/wpm/7d60da8668b8aa188efe296af686a5d218ad0453"

DESCRIPTION = (
    "Set on ten private acres, this stone estate pairs a chef's kitchen with a "
    "walk-out lower level, a heated pool and a four-car garage, minutes from "
    "shopping and the turnpike."
)

LISTING_HTML = f"""
<html>
  <head>
    <title>809 Mount Pleasant Rd</title>
    <style>.hero {{ color: red; }}</style>
  </head>
  <body>
    <header><nav><a href="/">Home</a></nav></header>
    <h1>809 Mount Pleasant Rd, Pine Twp, PA 16046</h1>
    <div class="price-block"><span class="price">$4,600,000</span></div>
    <ul class="stats">
      <li>4 BED</li>
      <li>6 BATH</li>
      <li>7,310 SQFT</li>
    </ul>
    <div class="hero" style="background-image: url('https://i3.moxi.onl/{GALLERY_BASE}/3_2_medium.jpg')"></div>
    <img src="https://cdn.example.com/logo.png" />
    <section class="description">
      <h2>Description</h2>
      <p>{DESCRIPTION}</p>
    </section>
    <section class="details">
      <ul>
        <li>MLS #: 1636459</li>
        <li>Taxes: $38,000</li>
        <li>Lot Size: 10.5 acres</li>
        <li>Type: Single-Family Home</li>
        <li>Year Built: 2002</li>
        <li>Style: Colonial</li>
        <li>School District: Pine-Richland</li>
        <li>County: Butler County</li>
      </ul>
    </section>
    <footer><p>Copyright 2026 Agent Realty. All rights reserved.</p></footer>
  </body>
</html>
"""


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")
        self.headers = {"Content-Type": "text/html; charset=utf-8"}
        self.encoding = "utf-8"


class FakeSession:
    """Stands in for ``requests.Session`` and records every call."""

    def __init__(
        self,
        page: FakeResponse | Exception | None = None,
        head: Optional[Callable[[str], FakeResponse]] = None,
    ) -> None:
        self.page = page if page is not None else FakeResponse(200, LISTING_HTML)
        self.head_handler = head or (lambda url: FakeResponse(404))
        self.headers: dict[str, str] = {}
        self.get_calls: list[tuple[str, dict]] = []
        self.head_calls: list[tuple[str, dict]] = []
        self.closed = False

    def get(self, url: str, **kwargs: object) -> FakeResponse:
        self.get_calls.append((url, kwargs))
        if isinstance(self.page, Exception):
            raise self.page
        return self.page

    def head(self, url: str, **kwargs: object) -> FakeResponse:
        self.head_calls.append((url, kwargs))
        return self.head_handler(url)

    def close(self) -> None:
        self.closed = True


def image_index(url: str) -> int:
    return int(url.rsplit("/", 1)[1].split("_")[0])


def gallery_of(size: int) -> Callable[[str], FakeResponse]:
    """HEAD handler for a gallery whose images 1..size exist."""

    def handler(url: str) -> FakeResponse:
        return FakeResponse(200 if image_index(url) <= size else 404)

    return handler


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession(head=gallery_of(3))


@pytest.fixture
def timeout_error() -> requests.Timeout:
    return requests.Timeout("read timed out")
