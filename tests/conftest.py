"""Fixtures compartidas: settings aislados y transporte HTTP falso."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import httpx
import pytest

from core.config import AppSettings


@dataclass
class RecordingTransport:
    """`httpx.MockTransport` que guarda cada request recibida."""

    handler: Callable[[httpx.Request], httpx.Response]
    requests: list[httpx.Request] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(_env_file=None, static_dir=tmp_path / "missing-static")


@pytest.fixture
def make_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> RecordingTransport:
        return RecordingTransport(handler)

    return factory


def html_response(body: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, text=body, headers={"Content-Type": "text/html; charset=utf-8"})


def json_response(payload: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)
