"""Authenticated access to the SOAR REST API."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import httpx

from .structures import InboundDestination, MessageDestination, Org, SessionResponse

_T = TypeVar("_T")


class SoarError(Exception):
    """Raised when the SOAR server cannot be reached, refuses a request or answers garbage."""


class HTTPClient:
    """A REST client bound to one SOAR host and one API key."""

    def __init__(
        self,
        hostname: str,
        key_id: str,
        key_secret: str,
        *,
        insecure: bool = False,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.hostname = hostname
        self.key_id = key_id
        self.key_secret = key_secret
        self.insecure = insecure
        self.session: SessionResponse | None = None
        self.org: Org | None = None
        self._client = httpx.Client(
            auth=(key_id, key_secret), verify=not insecure, timeout=timeout, transport=transport
        )

    @classmethod
    def connect(
        cls,
        hostname: str,
        key_id: str,
        key_secret: str,
        *,
        insecure: bool = False,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> HTTPClient:
        """Create a client and check connectivity by fetching the session's organisation."""
        client = cls(hostname, key_id, key_secret, insecure=insecure, timeout=timeout, transport=transport)
        try:
            client.session = client.get_org()
        except BaseException:
            client.close()
            raise
        client.org = client.session.orgs[0]
        return client

    def request(self, method: str, url: str, data: Any = None) -> httpx.Response:
        """Send a request to ``https://<hostname>/rest/<url>`` with basic authentication."""
        try:
            return self._client.request(method, f"https://{self.hostname}/rest/{url}", content=data)
        except httpx.HTTPError as exc:
            raise SoarError(str(exc)) from exc

    def get_org(self) -> SessionResponse:
        """Fetch the session description; it must name at least one organisation."""
        response = self.request("GET", "session")
        if response.status_code != 200:
            raise SoarError(
                f"Error connecting to SOAR, status: {response.status_code} {response.reason_phrase}"
            )
        session = _decode(response, SessionResponse.from_dict)
        if not session.orgs:
            raise SoarError("API key is not associated with any organization")
        return session

    def org_request(self, method: str, url: str, data: Any = None) -> httpx.Response:
        """Send a request below ``orgs/<org id>/``."""
        if self.org is None:
            raise SoarError("client has no organisation; connect first")
        return self.request(method, f"orgs/{self.org.id}/{url}", data)

    def message_destination_available(self, name: str) -> bool:
        """Whether this API key may consume the named message destination."""
        response = self.org_request("GET", f"message_destinations/{name}")
        destination = _decode(response, MessageDestination.from_dict)
        return self._api_key_handle() in destination.api_keys

    def inbound_destination_available(self, name: str) -> bool:
        """Whether this API key may both read and write the named inbound destination."""
        response = self.org_request("GET", f"inbound_destinations/{name}")
        destination = _decode(response, InboundDestination.from_dict)
        handle = self._api_key_handle()
        return handle in destination.read_principals and handle in destination.write_principals

    def _api_key_handle(self) -> int:
        if self.session is None:
            raise SoarError("client has no session; connect first")
        return self.session.api_key_handle

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _decode(response: httpx.Response, build: Callable[[Any], _T]) -> _T:
    try:
        return build(response.json())
    except ValueError as exc:
        raise SoarError(f"invalid response body (status {response.status_code}): {exc}") from exc