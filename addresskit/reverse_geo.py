"""Reverse geocoding of coordinates to nearby US addresses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from addresskit.credentials import Request, RequestSender
from addresskit.zipcode import _from_json, _record_field

LOOKUP_URL = "/lookup"


@dataclass
class Coordinate:
    latitude: float = 0.0
    longitude: float = 0.0
    accuracy: str = ""
    license: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Coordinate:
        return _from_json(cls, data)


@dataclass
class Address:
    street: str = ""
    city: str = ""
    state_abbreviation: str = ""
    zipcode: str = ""
    source: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Address:
        return _from_json(cls, data)


@dataclass
class Result:
    """One address near the requested coordinate."""

    coordinate: Coordinate = _record_field(Coordinate)
    address: Address = _record_field(Address)
    distance: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> Result:
        return _from_json(cls, data)


@dataclass
class Response:
    results: list[Result] = _record_field(Result, many=True)

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        return cls() if data is None else _from_json(cls, data)


@dataclass
class Lookup:
    """A coordinate to reverse geocode."""

    latitude: float = 0.0
    longitude: float = 0.0
    source: str = ""
    response: Response = field(default_factory=Response)


class Client:
    """Sends coordinates to the US reverse geocoding API."""

    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def send_lookup(self, lookup: Lookup | None, context: Any = None) -> None:
        """Send the lookup and store the response on it."""
        if lookup is None or (lookup.latitude == 0 and lookup.longitude == 0):
            return
        request = Request(
            method="GET",
            path=LOOKUP_URL,
            query={
                "latitude": f"{lookup.latitude:.8f}",
                "longitude": f"{lookup.longitude:.8f}",
                "source": lookup.source,
            },
            context=context,
        )
        parsed = json.loads(self._sender.send(request))
        if parsed is not None:
            lookup.response = Response.from_dict(parsed)