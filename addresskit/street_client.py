"""Batching and sending of US street address lookups."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

from addresskit.credentials import Request, RequestSender
from addresskit.street import Candidate, Lookup

MAX_BATCH_SIZE = 100
VERIFY_URL = "/street-address"


class Batch:
    """Up to 100 lookups sent together."""

    def __init__(self) -> None:
        self._lookups: list[Lookup] = []

    def append(self, lookup: Lookup) -> bool:
        """Add the lookup if there is room; return whether it was added."""
        if self.is_full():
            return False
        self._lookups.append(lookup)
        return True

    def is_full(self) -> bool:
        return len(self._lookups) == MAX_BATCH_SIZE

    def __len__(self) -> int:
        return len(self._lookups)

    def records(self) -> list[Lookup]:
        return self._lookups

    def clear(self) -> None:
        self._lookups = []

    def _attach(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            if 0 <= candidate.input_index < len(self._lookups):
                self._lookups[candidate.input_index].results.append(candidate)

    def build_request(self) -> Request:
        """A GET with a query string for one lookup, else a JSON POST."""
        if len(self._lookups) == 1:
            return Request(method="GET", path=VERIFY_URL, query=self._lookups[0].encode_query())
        payload = json.dumps(
            [lookup.to_json() for lookup in self._lookups], separators=(",", ":")
        ).encode()
        return Request(
            method="POST",
            path=VERIFY_URL,
            headers={"Content-Type": "application/json"},
            body=payload,
        )


class Client:
    """Sends batches of lookups to the US street address API."""

    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def send_batch(self, batch: Batch | None, context: Any = None) -> None:
        """Send the batch and attach the returned candidates to its lookups."""
        if batch is None or len(batch) == 0:
            return
        request = batch.build_request()
        request.context = context
        response = self._sender.send(request)
        parsed = json.loads(response)
        if parsed is None:
            parsed = []
        if not isinstance(parsed, list):
            raise ValueError("expected a JSON array of candidates")
        candidates = [Candidate.from_dict(item) for item in parsed if item is not None]
        batch._attach(candidates)

    def send_lookups(self, *args: Lookup) -> None:
        """Send all given lookups in batches of up to 100."""
        self.send_from_iterable(args, None)

    def send_from_iterable(
        self,
        lookups: Iterable[Lookup],
        output: Callable[[Lookup], Any] | None = None,
    ) -> None:
        """Send lookups in batches, handing each processed lookup to output.

        Processing stops at the first failing batch, whose error is raised.
        """
        batch = Batch()
        for lookup in lookups:
            batch.append(lookup)
            if batch.is_full():
                self._flush(batch, output)
        if len(batch):
            self._flush(batch, output)

    def _flush(self, batch: Batch, output: Callable[[Lookup], Any] | None) -> None:
        try:
            self.send_batch(batch)
        finally:
            if output is not None:
                for lookup in batch.records():
                    output(lookup)
            batch.clear()