"""Shared test fixtures for hubpull tests."""

from __future__ import annotations

import logging
from typing import Any, Callable, Union
from unittest.mock import MagicMock

import httpx
import pytest

from hubpull.models.credential import Credential, IdentityKind
from hubpull.models.reference import RegistryReference
from hubpull.models.selection import SelectionList
from hubpull.models.session import reset_session
from hubpull.registry.engine import DockerEngine
from hubpull.registry.hub import HubClient
from hubpull.utils.config import set_config
from hubpull.utils.tracing import CallTracer, set_tracer

Route = Union[tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class HubStub:
    """Fake hub API served through httpx.MockTransport.

    Routes are keyed by method and URL path; unknown paths answer 404.
    Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = (status, json)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "object not found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    def calls(self, path: str, method: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.url.path == path and (method is None or r.method == method)
        ]

    def client(self, **kwargs: Any) -> HubClient:
        return HubClient(
            transport=httpx.MockTransport(self),
            tracer=CallTracer(enabled=False),
            **kwargs,
        )


class ScriptedPrompts:
    """Answers prompts from a fixed script and records what was shown."""

    def __init__(self, answers: list[str] | None = None) -> None:
        self.answers = list(answers or [])
        self.asked: list[str] = []
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.shown_tags: list[tuple[RegistryReference, SelectionList]] = []

    def ask(self, prompt: str) -> str:
        self.asked.append(prompt)
        return self.answers.pop(0) if self.answers else ""

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_tags(self, reference: RegistryReference, tags: SelectionList) -> None:
        self.shown_tags.append((reference, tags))


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    """Give every test a fresh session, tracer and config."""
    monkeypatch.delenv("HUBPULL_CREDENTIALS", raising=False)
    reset_session()
    set_tracer(None)
    set_config(None)
    yield
    reset_session()
    set_tracer(None)
    set_config(None)
    logging.getLogger("hubpull").handlers = []


@pytest.fixture
def hub_stub() -> HubStub:
    """Create an empty fake hub."""
    return HubStub()


@pytest.fixture
def org_credential() -> Credential:
    """Organization access token credential."""
    return Credential(
        identity="futuresecureai",
        token="dckr_oat_0123456789",
        identity_kind=IdentityKind.ORGANIZATION,
    )


@pytest.fixture
def personal_credential() -> Credential:
    """Personal access token credential."""
    return Credential(
        identity="jdoe",
        token="dckr_pat_abcdefghij",
        identity_kind=IdentityKind.PERSONAL,
    )


@pytest.fixture
def docker_client() -> MagicMock:
    """Mock Docker SDK client."""
    client = MagicMock()
    client.ping.return_value = True
    client.login.return_value = {"Status": "Login Succeeded"}
    client.images.list.return_value = []
    return client


@pytest.fixture
def engine(docker_client: MagicMock) -> DockerEngine:
    """Engine backed by the mock Docker client."""
    return DockerEngine(client=docker_client, tracer=CallTracer(enabled=False))


@pytest.fixture
def credential_file(tmp_path):
    """Write a credential file and return its path."""

    def _write(content: str):
        path = tmp_path / ".docker-credentials"
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def scripted():
    """Factory for scripted prompt answers."""
    return ScriptedPrompts
