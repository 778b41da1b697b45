"""Input and output records of the US ZIP code API."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

_R = TypeVar("_R")


def _record_field(kind: type, *, many: bool = False, json: str | None = None) -> Any:
    """Declare a field holding a nested record, or a list of them when many is true."""
    metadata: dict[str, Any] = {"many" if many else "one": kind}
    if json:
        metadata["json"] = json
    return field(default_factory=list if many else kind, metadata=metadata)


def _from_json(cls: type[_R], data: Any) -> _R:
    """Build a dataclass from a decoded JSON object; absent or null keys keep defaults."""
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object for {cls.__name__}, got {type(data).__name__}")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        value = data.get(f.metadata.get("json", f.name))
        if value is None:
            continue
        if "many" in f.metadata:
            value = [f.metadata["many"].from_dict(item) for item in value]
        elif "one" in f.metadata:
            value = f.metadata["one"].from_dict(value)
        kwargs[f.name] = value
    return cls(**kwargs)


@dataclass
class County:
    county_fips: str = ""
    county_name: str = ""
    state_abbreviation: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> County:
        return _from_json(cls, data)


@dataclass
class CityState:
    city: str = ""
    mailable_city: bool = False
    state_abbreviation: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> CityState:
        return _from_json(cls, data)


@dataclass
class ZIPCode(County):
    """A ZIP code with its primary county and any alternate counties."""

    zipcode: str = ""
    zipcode_type: str = ""
    default_city: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    precision: str = ""
    alternate_counties: list[County] = _record_field(County, many=True)

    @classmethod
    def from_dict(cls, data: Any) -> ZIPCode:
        return _from_json(cls, data)


@dataclass
class Result:
    """The answer for one lookup."""

    input_id: str = ""
    input_index: int = 0
    status: str = ""
    reason: str = ""
    city_states: list[CityState] = _record_field(CityState, many=True)
    zipcodes: list[ZIPCode] = _record_field(ZIPCode, many=True)

    @classmethod
    def from_dict(cls, data: Any) -> Result:
        return _from_json(cls, data)


@dataclass
class Lookup:
    """A city/state or ZIP code to look up."""

    city: str = ""
    state: str = ""
    zipcode: str = ""
    input_id: str = ""
    result: Result | None = None

    def encode_query(self) -> dict[str, str]:
        """Return the query-string parameters for a single-lookup GET."""
        pairs = {
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "input_id": self.input_id,
        }
        return {name: value for name, value in pairs.items() if value}

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object sent in a batch POST, omitting empty fields."""
        return dict(self.encode_query())