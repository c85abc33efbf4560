"""Shared stand-ins for requests.Session and a capturing logger."""
from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import requests

from _config import AppConfig
from _logging import Logger


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Scripted session: each of post/get returns the configured response or raises the configured error."""

    def __init__(
        self,
        post: Any = None,
        get: Any = None,
    ) -> None:
        self._post = post
        self._get = get
        self.posts: List[Dict[str, Any]] = []
        self.gets: List[Dict[str, Any]] = []
        self.closed = False

    def _answer(self, what: Any) -> FakeResponse:
        if isinstance(what, BaseException):
            raise what
        if what is None:
            raise AssertionError("unexpected call")
        return what

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        return self._answer(self._post)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.gets.append({"url": url, **kwargs})
        return self._answer(self._get)

    def close(self) -> None:
        self.closed = True


def make_config(**overrides: Any) -> AppConfig:
    base = dict(
        base_url="http://movary.local/",
        client_string="NextFeature/Test",
        email="home@example.org",
        password="hunter2",
        user_id="7",
        next_dt="2025-09-13T22:00:00",
    )
    base.update(overrides)
    return AppConfig(**base)


def capture_logger(level: str = "debug") -> "tuple[Logger, io.StringIO]":
    buf = io.StringIO()
    return Logger(stream=buf, level=level, use_color=False, show_time=False), buf


def token_ok(token: str = "tok-123", field: str = "authToken") -> FakeResponse:
    return FakeResponse(200, {field: token})


def watchlist_ok(entries: List[Any], field: str = "watchlist") -> FakeResponse:
    return FakeResponse(200, {field: entries})


DUNE_ENTRY = {
    "movie": {
        "title": "Dune: Part Two",
        "releaseDate": "2024-02-27",
        "overview": "Paul Atreides unites with Chani and the Fremen.",
        "posterPath": "/storage/images/posters/dune2.jpg",
    },
    "addedAt": "2025-09-01 18:22:01",
}

CONNECTION_ERROR = requests.ConnectionError("connection refused")
