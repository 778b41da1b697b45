"""Request model, sender protocol and website-key signing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol
from urllib.parse import urlencode

VERSION = "v1.15.4"

_SCHEME_TERMINATOR = "://"
_HTTP_SCHEME = "http" + _SCHEME_TERMINATOR
_HTTPS_SCHEME = "https" + _SCHEME_TERMINATOR


@dataclass
class Request:
    """An outgoing API request whose base URL is completed by the sender."""

    method: str = "GET"
    path: str = "/"
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    context: Any = None

    def url(self) -> str:
        """Return the path followed by the query string, keys sorted."""
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(sorted(self.query.items()))}"


class RequestSender(Protocol):
    """Anything able to deliver a request and return the raw response body."""

    def send(self, request: Request) -> bytes:
        """Send the request, returning the body or raising on failure."""


class WebsiteKeyCredential:
    """Signs requests with a website key and a referring host."""

    def __init__(self, key: str, host_name_or_ip: str) -> None:
        if not host_name_or_ip.startswith((_HTTPS_SCHEME, _HTTP_SCHEME)):
            host_name_or_ip = _HTTP_SCHEME + host_name_or_ip
        self.key = key
        self.host = host_name_or_ip

    def sign(self, request: Request) -> None:
        """Add the key to the query string and the host as the Referer."""
        request.query["key"] = self.key
        request.headers["Referer"] = self.host