from __future__ import annotations

import json
from typing import Any, Callable

import pytest
import requests

from logger import get_logger

_MISSING = object()


class FakeResponse:
    """Stand-in for requests.Response with just what the clients use."""

    def __init__(self, status_code: int = 200, *, json_body: Any = _MISSING, text: str | None = None) -> None:
        self.status_code = status_code
        self._json = json_body
        if text is None:
            text = json.dumps(json_body) if json_body is not _MISSING else ""
        self.text = text

    def json(self) -> Any:
        if self._json is _MISSING:
            return json.loads(self.text)
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records every request and answers through a handler callable."""

    def __init__(self, handler: Callable[..., FakeResponse]) -> None:
        self.handler = handler
        self.calls: list[tuple[str, str, dict]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("GET", url, kwargs))
        return self.handler("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("POST", url, kwargs))
        return self.handler("POST", url, **kwargs)


def watchlist_html(slugs: list[str], pages: int | None = None) -> str:
    """Render a minimal Letterboxd watchlist page."""
    posters = "".join(
        f'<li class="poster-container"><div class="film-poster" data-film-slug="{slug}"></div></li>'
        for slug in slugs
    )
    pagination = ""
    if pages:
        items = "".join(f'<li class="paginate-page"><a>{n}</a></li>' for n in range(1, pages + 1))
        pagination = f'<div class="paginate-pages"><ul>{items}</ul></div>'
    return f'<html><body><ul class="poster-list">{posters}</ul>{pagination}</body></html>'


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture
def fake_session() -> type[FakeSession]:
    return FakeSession


@pytest.fixture
def render_watchlist() -> Callable[..., str]:
    return watchlist_html


@pytest.fixture(autouse=True)
def _reset_logger():
    logger = get_logger()
    logger.set_level("INFO")
    logger.set_stream(None)
    yield
    logger.set_level("INFO")
    logger.set_stream(None)
