"""Extraction of addresses from free text via the US extract API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from addresskit.credentials import Request, RequestSender
from addresskit.street import Candidate, MatchStrategy
from addresskit.zipcode import _from_json, _record_field

EXTRACT_URL = "/"


class HTMLPayload(str, Enum):
    """Whether the submitted text is HTML."""

    UNSPECIFIED = ""  # the server decides
    YES = "true"
    NO = "false"


@dataclass
class Metadata:
    lines: int = 0
    characters: int = field(default=0, metadata={"json": "character_count"})
    bytes: int = 0
    addresses: int = field(default=0, metadata={"json": "address_count"})
    verified_addresses: int = field(default=0, metadata={"json": "verified_count"})
    contains_non_ascii_unicode: bool = field(default=False, metadata={"json": "unicode"})

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        return _from_json(cls, data)


@dataclass
class ExtractedAddress:
    text: str = ""
    verified: bool = False
    line: int = 0
    start: int = 0
    end: int = 0
    api_output: list[Candidate] = _record_field(Candidate, many=True)

    @classmethod
    def from_dict(cls, data: Any) -> ExtractedAddress:
        return _from_json(cls, data)


@dataclass
class Result:
    metadata: Metadata = _record_field(Metadata, json="meta")
    addresses: list[ExtractedAddress] = _record_field(ExtractedAddress, many=True)

    @classmethod
    def from_dict(cls, data: Any) -> Result:
        return cls() if data is None else _from_json(cls, data)


@dataclass
class Lookup:
    """Text to search for addresses, with extraction options."""

    text: str = ""
    html: HTMLPayload = HTMLPayload.UNSPECIFIED
    aggressive: bool = False
    addresses_with_line_breaks: bool = False
    addresses_per_line: int = 0
    match_strategy: MatchStrategy | None = None
    result: Result | None = None

    def populate(self, request: Request) -> None:
        """Write options to the query, the text to the body, and the content type."""
        query = request.query
        if self.html != HTMLPayload.UNSPECIFIED:
            query["html"] = self.html.value
        if self.aggressive:
            query["aggressive"] = "true"
        if self.addresses_with_line_breaks:
            query["addr_line_breaks"] = "true"
        if self.addresses_per_line > 0:
            query["addr_per_line"] = str(self.addresses_per_line)
        if self.match_strategy is not None and self.match_strategy != MatchStrategy.STRICT:
            query["match"] = self.match_strategy.value
        if self.text:
            request.body = self.text.encode()
        request.headers["Content-Type"] = "text/plain"


class Client:
    """Sends text to the US extract API."""

    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def send_lookup(self, lookup: Lookup | None, context: Any = None) -> None:
        """Send the lookup's text and store the extraction result on it."""
        if lookup is None or not lookup.text:
            return
        request = Request(method="POST", path=EXTRACT_URL)
        lookup.populate(request)
        request.context = context
        response = self._sender.send(request)
        lookup.result = Result.from_dict(json.loads(response))