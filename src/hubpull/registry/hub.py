"""Docker Hub REST API client."""

from __future__ import annotations

from typing import Any

import httpx

from hubpull.models.image import SearchResult
from hubpull.models.reference import RegistryReference
from hubpull.registry.base import RegistryAuthError, RegistryError, RegistryNotFoundError
from hubpull.utils.config import RegistryConfig
from hubpull.utils.logging import get_logger
from hubpull.utils.tracing import CallTracer, get_tracer

logger = get_logger(__name__)


class HubClient:
    """Client for the hub's search, tag, repository and login endpoints.

    Every call opens a short-lived HTTP client; calls are strictly
    sequential and rely on httpx's default timeouts.

    Example:
        hub = HubClient()
        results = hub.search_repositories("nginx")
        tags = hub.list_tags(RegistryReference.parse("nginx"))
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        tracer: CallTracer | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the hub client.

        Args:
            config: Endpoint configuration (defaults to Docker Hub)
            tracer: Debug tracer (defaults to the process-wide tracer)
            transport: Optional httpx transport, used by tests
        """
        self._config = config or RegistryConfig()
        self._tracer = tracer
        self._transport = transport

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def _get_client(self) -> httpx.Client:
        tracer = self._tracer or get_tracer()
        return httpx.Client(
            transport=self._transport,
            follow_redirects=True,
            event_hooks=tracer.event_hooks(),
            headers={"Accept": "application/json"},
        )

    def _request_json(
        self,
        method: str,
        url: str,
        target: str,
        **kwargs: Any,
    ) -> Any:
        """Make a request and decode its JSON body.

        Args:
            method: HTTP method
            url: Request URL
            target: What is being requested, for error messages
            **kwargs: Additional request arguments

        Raises:
            RegistryAuthError: On 401/403
            RegistryNotFoundError: On 404
            RegistryError: On any other failure
        """
        try:
            with self._get_client() as client:
                response = client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise RegistryError(f"Request for {target} failed: {e}", code="NETWORK_ERROR")

        if response.status_code in (401, 403):
            raise RegistryAuthError(
                f"Not authorized for {target} (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        if response.status_code == 404:
            raise RegistryNotFoundError(target)
        if response.status_code >= 400:
            raise RegistryError(
                f"Request for {target} failed: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise RegistryError(f"Invalid JSON in response for {target}", code="INVALID_RESPONSE")

    @staticmethod
    def _result_names(data: Any) -> list[str]:
        if not isinstance(data, dict):
            return []
        results = data.get("results") or []
        return [r["name"] for r in results if isinstance(r, dict) and r.get("name")]

    def search_repositories(self, term: str, limit: int | None = None) -> list[SearchResult]:
        """Search public repositories.

        Args:
            term: Search term
            limit: Maximum number of results (defaults to configured limit)

        Returns:
            Matching repositories in relevance order
        """
        params = {"q": term, "n": limit or self._config.search_limit}
        url = f"{self._config.index_url}/v1/search"
        data = self._request_json("GET", url, f"search '{term}'", params=params)

        if not isinstance(data, dict):
            data = {}
        results = []
        for item in data.get("results") or []:
            if not isinstance(item, dict) or not item.get("name"):
                continue
            results.append(
                SearchResult(
                    name=item["name"],
                    description=(item.get("description") or "").strip(),
                    star_count=item.get("star_count") or 0,
                    is_official=bool(item.get("is_official")),
                )
            )
        logger.debug(f"Search '{term}' returned {len(results)} repositories")
        return results

    def list_tags(self, reference: RegistryReference, page_size: int | None = None) -> list[str]:
        """List tags for a repository (first page only).

        Args:
            reference: Repository reference; the tag is ignored
            page_size: Tags to fetch (defaults to configured page size)

        Returns:
            Tag names in the order the hub returns them
        """
        path = reference.repository_path(self._config.default_namespace)
        url = f"{self._config.hub_url}/v2/repositories/{path}/tags"
        params = {"page_size": page_size or self._config.tag_page_size}
        data = self._request_json("GET", url, path, params=params)
        tags = self._result_names(data)
        logger.debug(f"Found {len(tags)} tags for {path}")
        return tags

    def list_repositories(
        self,
        namespace: str,
        auth: httpx.Auth | tuple[str, str] | None = None,
        authorization: str | None = None,
    ) -> list[str]:
        """List repositories in a namespace.

        Args:
            namespace: Organization or username
            auth: httpx auth (e.g. a Basic username/password pair)
            authorization: Raw Authorization header value

        Returns:
            Repository names (without the namespace)
        """
        url = f"{self._config.hub_url}/v2/repositories/{namespace}/"
        params = {"page_size": self._config.repository_page_size}
        headers = {"Authorization": authorization} if authorization else None
        data = self._request_json(
            "GET", url, f"repositories of {namespace}", params=params, auth=auth, headers=headers
        )
        return self._result_names(data)

    def exchange_session_token(self, identity: str, token: str) -> str:
        """Exchange an identity and access token for a hub session token.

        Args:
            identity: Username
            token: Access token

        Returns:
            Session token

        Raises:
            RegistryAuthError: If the hub rejects the pair or returns no token
        """
        url = f"{self._config.hub_url}/v2/users/login"
        data = self._request_json(
            "POST", url, "session token", json={"username": identity, "password": token}
        )
        session_token = data.get("token") if isinstance(data, dict) else None
        if not session_token:
            raise RegistryAuthError("Login endpoint returned no session token")
        return session_token
