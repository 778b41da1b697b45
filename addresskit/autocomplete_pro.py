"""Address suggestions from the US autocomplete pro API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from addresskit.credentials import Request, RequestSender

SUGGEST_URL = "/lookup"


class Geolocation(str, Enum):
    CITY = "city"
    NONE = "none"


@dataclass
class Lookup:
    """A partial address to complete, with filters and preferences."""

    search: str = ""
    source: str = ""
    max_results: int = 0
    city_filter: list[str] = field(default_factory=list)
    state_filter: list[str] = field(default_factory=list)
    zip_filter: list[str] = field(default_factory=list)
    exclude_states: list[str] = field(default_factory=list)
    prefer_city: list[str] = field(default_factory=list)
    prefer_state: list[str] = field(default_factory=list)
    prefer_zip: list[str] = field(default_factory=list)
    prefer_ratio: int = 0
    geolocation: Geolocation | None = None
    selected: str = ""
    results: list[Suggestion] = field(default_factory=list)

    def populate(self, query: dict[str, str]) -> None:
        """Write every set field into the query parameters."""
        if self.search:
            query["search"] = self.search
        if self.max_results > 0:
            query["max_results"] = str(self.max_results)
        lists = (
            ("include_only_cities", self.city_filter),
            ("include_only_states", self.state_filter),
            ("include_only_zip_codes", self.zip_filter),
            ("exclude_states", self.exclude_states),
            ("prefer_cities", self.prefer_city),
            ("prefer_states", self.prefer_state),
            ("prefer_zip_codes", self.prefer_zip),
        )
        for name, values in lists:
            if values:
                query[name] = ";".join(values)
        if self.prefer_ratio > 0:
            query["prefer_ratio"] = str(self.prefer_ratio)
        if self.zip_filter or self.prefer_zip:
            query["prefer_geolocation"] = Geolocation.NONE.value
        elif self.geolocation is not None:
            query["prefer_geolocation"] = Geolocation(self.geolocation).value
        if self.source:
            query["source"] = self.source
        if self.selected:
            query["selected"] = self.selected


@dataclass
class Suggestion:
    street_line: str = ""
    secondary: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    entries: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Suggestion:
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object for Suggestion, got {type(data).__name__}")
        return cls(
            **{f.name: data[f.name] for f in fields(cls) if data.get(f.name) is not None}
        )


class Client:
    """Sends lookups to the US autocomplete pro API."""

    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def send_lookup(self, lookup: Lookup | None, context: Any = None) -> None:
        """Send the lookup and store the suggestions on it."""
        if lookup is None or not lookup.search:
            return
        request = Request(method="GET", path=SUGGEST_URL, context=context)
        lookup.populate(request.query)
        response = self._sender.send(request)
        parsed = json.loads(response)
        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ValueError("expected a JSON object holding suggestions")
        lookup.results = [
            Suggestion.from_dict(item) for item in parsed.get("suggestions") or []
        ]