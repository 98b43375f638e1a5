"""Unit tests for login and repository enumeration."""

import json

import httpx
import pytest
from docker.errors import APIError, DockerException

from hubpull.core.auth import LISTING_TRANSPORTS, AuthStrategist, ListingTransport
from hubpull.models.session import Session, SessionMode, get_session
from hubpull.registry.base import RegistryError
from hubpull.utils.errors import AuthenticationError, EngineError

REPOS_PATH = "/v2/repositories/{}/"
LOGIN_PATH = "/v2/users/login"


def repos(*names):
    return {"count": len(names), "next": None, "results": [{"name": n} for n in names]}


class TestLogin:
    """Tests for AuthStrategist.login."""

    def test_success_establishes_session(self, engine, docker_client, hub_stub, org_credential):
        """Test that a successful login updates the session once."""
        session = Session()
        strategist = AuthStrategist(engine, hub_stub.client(), session=session)

        result = strategist.login(org_credential)

        assert result is session
        assert session.authenticated is True
        assert session.mode == SessionMode.ORGANIZATION_SCOPED
        docker_client.login.assert_called_once_with(
            username="futuresecureai", password="dckr_oat_0123456789", registry=None, reauth=True
        )

    def test_status_text_is_not_inspected(self, engine, docker_client, hub_stub, org_credential):
        """Test that a warning in the login response does not fail the login."""
        docker_client.login.return_value = {
            "Status": "WARNING! Your credentials are stored unencrypted. Error saving credentials"
        }
        strategist = AuthStrategist(engine, hub_stub.client(), session=Session())
        assert strategist.login(org_credential).authenticated is True

    def test_failure_leaves_session_unauthenticated(self, engine, docker_client, hub_stub, personal_credential):
        """Test that a rejected login raises and leaves the session untouched."""
        docker_client.login.side_effect = APIError("unauthorized: incorrect username or password")
        session = Session()
        strategist = AuthStrategist(engine, hub_stub.client(), session=session)

        with pytest.raises(AuthenticationError) as exc_info:
            strategist.login(personal_credential)

        assert exc_info.value.code == "AUTH_ERROR"
        assert session.authenticated is False
        assert session.mode == SessionMode.PUBLIC_SEARCH
        assert docker_client.login.call_count == 1

    def test_daemon_failure_propagates(self, engine, docker_client, hub_stub, org_credential):
        """Test that a daemon failure is not mistaken for rejected credentials."""
        docker_client.login.side_effect = DockerException("daemon went away")
        session = Session()
        strategist = AuthStrategist(engine, hub_stub.client(), session=session)

        with pytest.raises(EngineError) as exc_info:
            strategist.login(org_credential)

        assert exc_info.value.operation == "login"
        assert session.authenticated is False

    def test_uses_process_wide_session_by_default(self, engine, hub_stub, personal_credential):
        """Test the default session is the global one."""
        strategist = AuthStrategist(engine, hub_stub.client())
        strategist.login(personal_credential)
        assert get_session().identity == "jdoe"


class TestListRepositories:
    """Tests for AuthStrategist.list_repositories."""

    def test_basic_auth_first(self, engine, hub_stub, personal_credential):
        """Test that basic auth results stop the fallback."""
        hub_stub.add("GET", REPOS_PATH.format("jdoe"), json=repos("api", "web"))
        strategist = AuthStrategist(engine, hub_stub.client())

        assert strategist.list_repositories(personal_credential) == ["api", "web"]
        assert len(hub_stub.requests) == 1
        assert hub_stub.requests[0].headers["authorization"].startswith("Basic ")
        assert hub_stub.calls(LOGIN_PATH) == []

    def test_session_token_for_personal(self, engine, hub_stub, personal_credential):
        """Test the session-token exchange when basic auth yields nothing."""

        def listing(request: httpx.Request) -> httpx.Response:
            if request.headers.get("authorization") == "JWT session-jwt":
                return httpx.Response(200, json=repos("private-app"))
            return httpx.Response(200, json=repos())

        hub_stub.add_handler("GET", REPOS_PATH.format("jdoe"), listing)
        hub_stub.add("POST", LOGIN_PATH, json={"token": "session-jwt"})
        strategist = AuthStrategist(engine, hub_stub.client())

        assert strategist.list_repositories(personal_credential) == ["private-app"]
        login = hub_stub.calls(LOGIN_PATH)[0]
        assert json.loads(login.content) == {"username": "jdoe", "password": "dckr_pat_abcdefghij"}

    def test_bearer_last(self, engine, hub_stub, personal_credential):
        """Test the bearer transport after the others fail."""

        def listing(request: httpx.Request) -> httpx.Response:
            if request.headers.get("authorization") == "Bearer dckr_pat_abcdefghij":
                return httpx.Response(200, json=repos("from-bearer"))
            return httpx.Response(401, json={"detail": "nope"})

        hub_stub.add_handler("GET", REPOS_PATH.format("jdoe"), listing)
        hub_stub.add("POST", LOGIN_PATH, status=401, json={"detail": "bad"})
        strategist = AuthStrategist(engine, hub_stub.client())

        assert strategist.list_repositories(personal_credential) == ["from-bearer"]
        schemes = [
            r.headers["authorization"].split()[0]
            for r in hub_stub.calls(REPOS_PATH.format("jdoe"))
        ]
        assert schemes == ["Basic", "Bearer"]

    def test_organization_never_exchanges_session_token(self, engine, hub_stub, org_credential):
        """Test that organization tokens skip the session-token transport."""
        hub_stub.add("GET", REPOS_PATH.format("futuresecureai"), json=repos())
        hub_stub.add("POST", LOGIN_PATH, json={"token": "session-jwt"})
        strategist = AuthStrategist(engine, hub_stub.client())

        assert strategist.list_repositories(org_credential) == []
        assert hub_stub.calls(LOGIN_PATH) == []
        schemes = [
            r.headers["authorization"].split()[0]
            for r in hub_stub.calls(REPOS_PATH.format("futuresecureai"))
        ]
        assert schemes == ["Basic", "Bearer"]

    def test_all_empty_returns_empty_for_personal(self, engine, hub_stub, personal_credential):
        """Test graceful degradation when no transport lists anything."""
        hub_stub.add("GET", REPOS_PATH.format("jdoe"), json={})
        hub_stub.add("POST", LOGIN_PATH, json={"token": "session-jwt"})
        strategist = AuthStrategist(engine, hub_stub.client())

        assert strategist.list_repositories(personal_credential) == []
        assert len(hub_stub.calls(LOGIN_PATH)) == 1
        assert len(hub_stub.calls(REPOS_PATH.format("jdoe"))) == 3

    def test_network_errors_count_as_empty(self, engine, personal_credential, hub_stub):
        """Test that transport exceptions move on to the next transport."""

        def broken(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        hub_stub.add_handler("GET", REPOS_PATH.format("jdoe"), broken)
        hub_stub.add_handler("POST", LOGIN_PATH, broken)
        strategist = AuthStrategist(engine, hub_stub.client())

        assert strategist.list_repositories(personal_credential) == []

    def test_transports_are_data(self, engine, hub_stub, org_credential):
        """Test that a custom transport list is honored in order."""
        calls = []

        def first(hub, credential):
            calls.append("first")
            raise RegistryError("boom")

        def personal_only(hub, credential):
            calls.append("personal_only")
            return ["never"]

        def last(hub, credential):
            calls.append("last")
            return ["x"]

        transports = (
            ListingTransport("first", first),
            ListingTransport("personal-only", personal_only, organization_tokens=False),
            ListingTransport("last", last),
        )
        strategist = AuthStrategist(engine, hub_stub.client(), transports=transports)

        assert strategist.list_repositories(org_credential) == ["x"]
        assert calls == ["first", "last"]

    def test_default_transport_order(self):
        """Test the documented transport priority."""
        assert [t.name for t in LISTING_TRANSPORTS] == ["basic", "session-token", "bearer"]
        assert [t.organization_tokens for t in LISTING_TRANSPORTS] == [True, False, True]
