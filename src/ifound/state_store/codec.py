"""
Store <-> text codec.

The whole store is serialized as one JSON document. Decoding is strict
about the outer shape (an object whose collections are lists) and lenient
below it: missing parts default to empty, and individual records that do
not decode are skipped with a warning instead of failing the whole blob.
"""

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from ..schemas import CLAIMS, FOUND_REPORTS, Claim, FoundReport, Item, Store, resync_sequences

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreDecodeError(ValueError):
    """Raised when a stored blob cannot be turned back into a Store."""

    pass


def encode_store(store: Store) -> str:
    """Serialize a store to JSON text."""
    return json.dumps(store.to_dict(), ensure_ascii=False)


def decode_records(
    key: str,
    raw_records: Iterable[Any],
    decode: Callable[[dict[str, Any]], T],
) -> list[T]:
    """
    Decode a collection record by record.

    Records that are not objects, have no id, or fail to decode are logged
    and left out; the rest keep their order.
    """
    records: list[T] = []
    for raw in raw_records:
        if not isinstance(raw, dict) or raw.get("id") is None:
            logger.warning(f"Skipping {key} record without an id: {raw!r:.80}")
            continue
        try:
            records.append(decode(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed {key} record {raw.get('id')!r}: {e}")
    return records


def _decode_counter(seq_data: dict[str, Any], counter: str) -> int:
    value = seq_data.get(counter) or 0
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unreadable sequence counter {counter}={value!r}")
        return 0


def decode_store(text: str) -> Store:
    """
    Parse JSON text into a Store.

    Counters are raised to the largest surviving id so that a skipped or
    unreadable counter never leads to id reuse.

    Raises:
        StoreDecodeError: If the text is not JSON or not store-shaped.
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise StoreDecodeError(f"Stored blob is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StoreDecodeError(f"Stored blob is a {type(data).__name__}, expected an object")

    for key in ("items", FOUND_REPORTS, CLAIMS):
        if data.get(key) is not None and not isinstance(data[key], list):
            raise StoreDecodeError(f"Collection '{key}' is not a list")
    if data.get("seq") is not None and not isinstance(data["seq"], dict):
        raise StoreDecodeError("'seq' is not an object")

    seq_data = data.get("seq") or {}
    store = Store(
        items=decode_records("items", data.get("items") or [], Item.from_dict),
        found_reports=decode_records(
            FOUND_REPORTS, data.get(FOUND_REPORTS) or [], FoundReport.from_dict
        ),
        claims=decode_records(CLAIMS, data.get(CLAIMS) or [], Claim.from_dict),
        seq={
            FOUND_REPORTS: _decode_counter(seq_data, FOUND_REPORTS),
            CLAIMS: _decode_counter(seq_data, CLAIMS),
        },
    )
    resync_sequences(store)
    return store
