"""Input and output records of the US street address API."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, TypeVar

_T = TypeVar("_T")


class MatchStrategy(str, Enum):
    STRICT = "strict"
    RANGE = "range"  # deprecated
    INVALID = "invalid"
    ENHANCED = "enhanced"


def _load_flat(cls: type[_T], data: Any, skip: tuple[str, ...] = ()) -> dict[str, Any]:
    """Collect constructor arguments for cls from a JSON object."""
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object for {cls.__name__}, got {type(data).__name__}")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if f.name in skip:
            continue
        value = data.get(f.metadata.get("json", f.name))
        if value is not None:
            kwargs[f.name] = value
    return kwargs


@dataclass
class Lookup:
    """A single address to verify."""

    street: str = ""
    street2: str = ""
    secondary: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    lastline: str = ""
    addressee: str = ""
    urbanization: str = ""
    input_id: str = ""
    max_candidates: int = 0
    match_strategy: MatchStrategy | None = None
    results: list[Candidate] = field(default_factory=list)

    def _text_fields(self) -> list[tuple[str, str]]:
        return [
            ("street", self.street),
            ("street2", self.street2),
            ("secondary", self.secondary),
            ("city", self.city),
            ("state", self.state),
            ("zipcode", self.zipcode),
            ("lastline", self.lastline),
            ("addressee", self.addressee),
            ("urbanization", self.urbanization),
            ("input_id", self.input_id),
        ]

    def encode_query(self) -> dict[str, str]:
        """Return the query-string parameters for a single-lookup GET."""
        query = {name: value for name, value in self._text_fields() if value}
        if self.max_candidates > 0:
            query["candidates"] = str(self.max_candidates)
        elif self.match_strategy == MatchStrategy.ENHANCED:
            query["candidates"] = "5"
        if self.match_strategy is not None and self.match_strategy != MatchStrategy.STRICT:
            query["match"] = self.match_strategy.value
        return query

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object sent in a batch POST, omitting empty fields."""
        payload: dict[str, Any] = {name: value for name, value in self._text_fields() if value}
        if self.max_candidates:
            payload["candidates"] = self.max_candidates
        if self.match_strategy is not None:
            payload["match"] = self.match_strategy.value
        return payload


@dataclass
class Components:
    primary_number: str = ""
    street_predirection: str = ""
    street_name: str = ""
    street_postdirection: str = ""
    street_suffix: str = ""
    secondary_number: str = ""
    secondary_designator: str = ""
    extra_secondary_number: str = ""
    extra_secondary_designator: str = ""
    pmb_number: str = ""
    pmb_designator: str = ""
    city_name: str = ""
    default_city_name: str = ""
    state_abbreviation: str = ""
    zipcode: str = ""
    plus4_code: str = ""
    delivery_point: str = ""
    delivery_point_check_digit: str = ""
    urbanization: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Components:
        return cls(**_load_flat(cls, data))


@dataclass
class Metadata:
    record_type: str = ""
    zip_type: str = ""
    county_fips: str = ""
    county_name: str = ""
    carrier_route: str = ""
    congressional_district: str = ""
    building_default_indicator: str = ""
    rdi: str = ""
    elot_sequence: str = ""
    elot_sort: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    coordinate_license: int = 0
    precision: str = ""
    time_zone: str = ""
    utc_offset: float = 0.0
    dst: bool = False
    ews_match: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        return cls(**_load_flat(cls, data))


@dataclass
class Analysis:
    dpv_match_code: str = ""
    dpv_footnotes: str = ""
    dpv_cmra_code: str = field(default="", metadata={"json": "dpv_cmra"})
    dpv_vacant_code: str = field(default="", metadata={"json": "dpv_vacant"})
    dpv_no_stat: str = ""
    active: str = ""
    footnotes: str = ""
    lacslink_code: str = ""
    lacslink_indicator: str = ""
    suitelink_match: bool = False
    ews_match: bool = False  # deprecated
    enhanced_match: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Analysis:
        return cls(**_load_flat(cls, data))


@dataclass
class Candidate:
    """One verified match for an input lookup."""

    input_id: str = ""
    input_index: int = 0
    candidate_index: int = 0
    addressee: str = ""
    delivery_line_1: str = ""
    delivery_line_2: str = ""
    last_line: str = ""
    delivery_point_barcode: str = ""
    smarty_key: str = ""
    components: Components = field(default_factory=Components)
    metadata: Metadata = field(default_factory=Metadata)
    analysis: Analysis = field(default_factory=Analysis)

    @classmethod
    def from_dict(cls, data: Any) -> Candidate:
        nested = ("components", "metadata", "analysis")
        kwargs = _load_flat(cls, data, skip=nested)
        if data.get("components") is not None:
            kwargs["components"] = Components.from_dict(data["components"])
        if data.get("metadata") is not None:
            kwargs["metadata"] = Metadata.from_dict(data["metadata"])
        if data.get("analysis") is not None:
            kwargs["analysis"] = Analysis.from_dict(data["analysis"])
        return cls(**kwargs)