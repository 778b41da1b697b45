# addresskit

Request building and response parsing for a family of US address APIs:

| Module                        | Service                                        |
|-------------------------------|------------------------------------------------|
| `addresskit.credentials`      | the `Request` object, senders, website keys    |
| `addresskit.street`           | US street address lookups and candidates       |
| `addresskit.street_client`    | batching and sending of street lookups         |
| `addresskit.zipcode`          | US ZIP code lookups and results                |
| `addresskit.zipcode_client`   | batching and sending of ZIP code lookups       |
| `addresskit.extract`          | finding addresses in free text                 |
| `addresskit.reverse_geo`      | coordinates to nearby addresses                |
| `addresskit.autocomplete_pro` | address suggestions as you type                |

The package has no runtime dependencies.

## Installing

```
pip install addresskit
```

## Requests and senders

Every client builds an `addresskit.credentials.Request` (a dataclass with
`method`, `path`, `query`, `headers`, `body` and `context`) and hands it to a
*sender*: any object with a `send(request)` method that returns the raw
response body as bytes, or raises on failure. `RequestSender` describes that
protocol. `Request.path` is relative (for example `/street-address`); the
sender is responsible for the host. `Request.url()` returns the path with the
query string appended, keys sorted.

To sign a request with a website key, apply a `WebsiteKeyCredential` before
the request leaves:

```python
from addresskit.credentials import WebsiteKeyCredential

credential = WebsiteKeyCredential("placeholder", "example.com")
credential.sign(request)
# request.query["key"] == "placeholder"
# request.headers["Referer"] == "http://example.com"
```

A host given without `http://` or `https://` gets `http://` in front.

## Verifying street addresses

```python
from addresskit import street, street_client

client = street_client.Client(sender)

batch = street_client.Batch()
batch.append(street.Lookup(street="1 Main St", city="Springfield", state="IL"))
client.send_batch(batch)

for lookup in batch.records():
    for candidate in lookup.results:
        print(candidate.delivery_line_1, candidate.last_line)
```

A batch holds at most 100 lookups; `append` returns `False` once it is full.
A batch of one lookup goes out as a GET with a query string, larger batches
as a JSON POST body. Returned candidates are attached to the lookup named by
their `input_index`; null entries and out-of-range indexes are ignored.

`Lookup.match_strategy` takes a `street.MatchStrategy`. With
`MatchStrategy.ENHANCED` and no `max_candidates`, five candidates are asked
for.

To send any number of lookups without handling batches yourself:

```python
client.send_lookups(lookup1, lookup2, lookup3)
```

`send_from_iterable(lookups, output)` does the same for any iterable and calls
`output(lookup)` for each lookup as its batch completes. Processing stops at
the first batch that fails, and that error is raised.

## ZIP codes

`addresskit.zipcode` and `addresskit.zipcode_client` work the same way, with
one `Result` stored on `Lookup.result`. A result whose `input_index` lies
outside the batch raises `ValueError`.

## Extracting, reverse geocoding and autocomplete

`addresskit.extract`, `addresskit.reverse_geo` and
`addresskit.autocomplete_pro` each provide a `Lookup` and a `Client` whose
`send_lookup(lookup, context=None)` fills the lookup from the response:
`Lookup.result` for extract, `Lookup.response` for reverse geocoding and
`Lookup.results` for autocomplete. A lookup with nothing to send (no text, no
search, or a 0,0 coordinate) is left untouched and nothing is sent.

## Errors

Errors raised by the sender propagate unchanged, and a response body that is
not valid JSON raises the JSON decoding error. In both cases the lookup's
results are left as they were.

## What the package does not do

It opens no network connections. There is no HTTP transport, no retrying,
no base URL handling and no secret-key authentication: those belong to the
sender you supply.

## Running the tests

```
pip install addresskit[test]
pytest
```