import json

import pytest

from addresskit.street import Analysis, Candidate, Components, Lookup, Metadata
from addresskit.street_client import MAX_BATCH_SIZE, VERIFY_URL, Batch, Client


class FakeSender:
    def __init__(self, response="", error=None, error_on_call=None):
        self.response = response
        self.error = error
        self.error_on_call = error_on_call
        self.requests = []
        self.bodies = []

    def send(self, request):
        self.requests.append(request)
        if request.body is not None:
            self.bodies.append(request.body.decode())
        if self.error is not None and (
            self.error_on_call is None or self.error_on_call == len(self.requests)
        ):
            raise self.error
        return self.response.encode()


class FakeMultiSender(FakeSender):
    def send(self, request):
        self.response = '[{"input_index": %d}]' % (len(self.requests) + 1)
        return super().send(request)


def _lookups(count):
    return [Lookup(input_id=str(x)) for x in range(count)]


# Batch


def test_batch_knows_when_full():
    batch = Batch()
    for _ in range(MAX_BATCH_SIZE):
        assert batch.is_full() is False
        batch.append(Lookup())
    assert batch.is_full() is True


def test_capacity_limited_at_100():
    batch = Batch()
    assert len(batch) == 0
    assert batch.records() == []
    for x in range(MAX_BATCH_SIZE):
        assert batch.append(Lookup(input_id=str(x))) is True
    assert len(batch) == MAX_BATCH_SIZE
    for x in range(100, 200):
        assert batch.append(Lookup(input_id=str(x))) is False
    assert len(batch) == MAX_BATCH_SIZE
    assert len(batch.records()) == MAX_BATCH_SIZE


def test_json_serialization():
    batch = Batch()
    batch.append(
        Lookup(
            street="This",
            street2="test",
            secondary="exists",
            city="to",
            state="ensure",
            zipcode="the",
            lastline="input",
            addressee="always",
            urbanization="serializes",
            input_id="successfully",
            max_candidates=7,
        )
    )
    batch.append(Lookup(input_id="x"))
    body = json.loads(batch.build_request().body)
    assert body[0]["candidates"] == 7
    assert body[0]["urbanization"] == "serializes"
    assert body[1] == {"input_id": "x"}


def test_clear_removes_all_records():
    batch = Batch()
    for x in range(MAX_BATCH_SIZE):
        assert batch.append(Lookup(input_id=str(x))) is True
    batch.clear()
    assert len(batch) == 0


# Client


def test_single_lookup_sent_as_get_with_context():
    sender = FakeSender('[{"input_index": 0, "input_id": "42"}]')
    batch = Batch()
    lookup = Lookup(input_id="42")
    batch.append(lookup)
    ctx = {"key": "value"}

    Client(sender).send_batch(batch, ctx)

    request = sender.requests[0]
    assert request.method == "GET"
    assert request.path == "/street-address"
    assert request.body is None
    assert request.url().startswith(VERIFY_URL)
    assert request.query == {"input_id": "42"}
    assert request.context is ctx
    assert lookup.results == [Candidate(input_id="42")]


def test_batch_serialized_and_candidates_attached():
    sender = FakeSender(
        """[
        {"input_index": 0, "input_id": "42"},
        {"input_index": 2, "input_id": "44"},
        {"input_index": 2, "input_id": "44", "candidate_index": 1}
    ]"""
    )
    inputs = [Lookup(input_id="42"), Lookup(input_id="43"), Lookup(input_id="44")]
    batch = Batch()
    for lookup in inputs:
        batch.append(lookup)

    Client(sender).send_batch(batch)

    request = sender.requests[0]
    assert request.method == "POST"
    assert request.path == "/street-address"
    assert sender.bodies[0] == '[{"input_id":"42"},{"input_id":"43"},{"input_id":"44"}]'
    assert request.url() == VERIFY_URL
    assert request.headers["Content-Type"] == "application/json"
    assert inputs[0].results == [Candidate(input_id="42")]
    assert inputs[1].results == []
    assert inputs[2].results == [
        Candidate(input_id="44", input_index=2),
        Candidate(input_id="44", input_index=2, candidate_index=1),
    ]


def test_none_batch_is_nop():
    sender = FakeSender()
    Client(sender).send_batch(None)
    assert sender.requests == []


def test_empty_batch_is_nop():
    sender = FakeSender()
    Client(sender).send_batch(Batch())
    assert sender.requests == []


def test_sender_error_prevents_deserialization():
    sender = FakeSender('[{"input_index": 0, "input_id": "42"}]', error=RuntimeError("GOPHERS!"))
    batch = Batch()
    lookup = Lookup()
    batch.append(lookup)
    with pytest.raises(RuntimeError, match="GOPHERS!"):
        Client(sender).send_batch(batch)
    assert lookup.results == []


def test_deserialization_error():
    sender = FakeSender("I can't haz JSON")
    batch = Batch()
    lookup = Lookup()
    batch.append(lookup)
    with pytest.raises(ValueError):
        Client(sender).send_batch(batch)
    assert lookup.results == []


def test_null_candidates_ignored():
    sender = FakeSender("[null]")
    batch = Batch()
    lookup = Lookup()
    batch.append(lookup)
    Client(sender).send_batch(batch)
    assert lookup.results == []


def test_out_of_range_candidates_ignored():
    sender = FakeSender('[{"input_index": 9999999}]')
    batch = Batch()
    lookup = Lookup()
    batch.append(lookup)
    Client(sender).send_batch(batch)
    assert lookup.results == []


FULL_RESPONSE = """[
  {
    "input_id": "blah",
    "input_index": 0,
    "candidate_index": 4242,
    "addressee": "John Smith",
    "delivery_line_1": "3214 N University Ave # 409",
    "delivery_line_2": "blah blah",
    "last_line": "Provo UT 84604-4405",
    "delivery_point_barcode": "846044405140",
    "smarty_key": "1750774478",
    "components": {
      "primary_number": "3214",
      "street_predirection": "N",
      "street_postdirection": "Q",
      "street_name": "University",
      "street_suffix": "Ave",
      "secondary_number": "409",
      "secondary_designator": "#",
      "extra_secondary_number": "410",
      "extra_secondary_designator": "Apt",
      "pmb_number": "411",
      "pmb_designator": "Box",
      "city_name": "Provo",
      "default_city_name": "Provo",
      "state_abbreviation": "UT",
      "zipcode": "84604",
      "plus4_code": "4405",
      "delivery_point": "14",
      "delivery_point_check_digit": "0",
      "urbanization": "urbanization"
    },
    "metadata": {
      "record_type": "S",
      "zip_type": "Standard",
      "county_fips": "49049",
      "county_name": "Utah",
      "carrier_route": "C016",
      "congressional_district": "03",
      "building_default_indicator": "hi",
      "rdi": "Commercial",
      "elot_sequence": "0016",
      "elot_sort": "A",
      "latitude": 40.27658,
      "longitude": -111.65759,
      "coordinate_license": 1,
      "precision": "Rooftop",
      "time_zone": "Mountain",
      "utc_offset": -7,
      "dst": true,
      "ews_match": true
    },
    "analysis": {
      "dpv_match_code": "S",
      "dpv_footnotes": "AACCRR",
      "dpv_cmra": "Y",
      "dpv_vacant": "N",
      "dpv_no_stat": "N",
      "active": "Y",
      "footnotes": "footnotes",
      "lacslink_code": "lacslink_code",
      "lacslink_indicator": "lacslink_indicator",
      "suitelink_match": true,
      "enhanced_match": "enhanced_match"
    }
  }
]"""


def test_full_json_response_deserialization():
    sender = FakeSender(FULL_RESPONSE)
    batch = Batch()
    lookup = Lookup()
    batch.append(lookup)
    Client(sender).send_batch(batch)
    assert lookup.results == [
        Candidate(
            input_id="blah",
            input_index=0,
            candidate_index=4242,
            addressee="John Smith",
            delivery_line_1="3214 N University Ave # 409",
            delivery_line_2="blah blah",
            last_line="Provo UT 84604-4405",
            delivery_point_barcode="846044405140",
            smarty_key="1750774478",
            components=Components(
                primary_number="3214",
                street_predirection="N",
                street_name="University",
                street_postdirection="Q",
                street_suffix="Ave",
                secondary_number="409",
                secondary_designator="#",
                extra_secondary_number="410",
                extra_secondary_designator="Apt",
                pmb_number="411",
                pmb_designator="Box",
                city_name="Provo",
                default_city_name="Provo",
                state_abbreviation="UT",
                zipcode="84604",
                plus4_code="4405",
                delivery_point="14",
                delivery_point_check_digit="0",
                urbanization="urbanization",
            ),
            metadata=Metadata(
                record_type="S",
                zip_type="Standard",
                county_fips="49049",
                county_name="Utah",
                carrier_route="C016",
                congressional_district="03",
                building_default_indicator="hi",
                rdi="Commercial",
                elot_sequence="0016",
                elot_sort="A",
                latitude=40.27658,
                longitude=-111.65759,
                coordinate_license=1,
                precision="Rooftop",
                time_zone="Mountain",
                utc_offset=-7,
                dst=True,
                ews_match=True,
            ),
            analysis=Analysis(
                dpv_match_code="S",
                dpv_footnotes="AACCRR",
                dpv_cmra_code="Y",
                dpv_vacant_code="N",
                dpv_no_stat="N",
                active="Y",
                footnotes="footnotes",
                lacslink_code="lacslink_code",
                lacslink_indicator="lacslink_indicator",
                suitelink_match=True,
                ews_match=False,
                enhanced_match="enhanced_match",
            ),
        )
    ]


# Batch processing


def _assert_batch_bounds(bodies, first, last):
    assert bodies[0].startswith('[{"input_id":"%d"},' % first)
    assert bodies[0].endswith(',{"input_id":"%d"}]' % last)


def test_many_lookups_sent_in_batches():
    sender = FakeMultiSender()
    Client(sender).send_lookups(*_lookups(250))
    assert len(sender.requests) == 3
    _assert_batch_bounds(sender.bodies[0:], 0, 99)
    _assert_batch_bounds(sender.bodies[1:], 100, 199)
    _assert_batch_bounds(sender.bodies[2:], 200, 249)


def test_error_prevents_remaining_lookups_from_being_sent():
    sender = FakeMultiSender(error=RuntimeError("GOPHERS!"), error_on_call=2)
    with pytest.raises(RuntimeError, match="GOPHERS!"):
        Client(sender).send_lookups(*_lookups(250))
    assert len(sender.requests) == 2
    _assert_batch_bounds(sender.bodies[0:], 0, 99)
    _assert_batch_bounds(sender.bodies[1:], 100, 199)


def test_iterable_of_lookups_sent_in_batches_with_output():
    sender = FakeMultiSender()
    output = []
    Client(sender).send_from_iterable(iter(_lookups(250)), output.append)
    assert len(sender.requests) == 3
    assert len(output) == 250
    assert [lookup.input_id for lookup in output] == [str(x) for x in range(250)]
    _assert_batch_bounds(sender.bodies[0:], 0, 99)
    _assert_batch_bounds(sender.bodies[1:], 100, 199)
    _assert_batch_bounds(sender.bodies[2:], 200, 249)


def test_error_still_routes_failed_batch_to_output():
    sender = FakeMultiSender(error=RuntimeError("GOPHERS!"), error_on_call=2)
    output = []
    with pytest.raises(RuntimeError):
        Client(sender).send_from_iterable(_lookups(250), output.append)
    assert len(sender.requests) == 2
    assert len(output) == 200