"""
Identifier generation.

Items get random 128-bit UUIDs. Found reports and claims get integer ids
from per-collection sequence counters kept inside the Store, so the
increment is persisted by the same save as the record it numbers.

Counters never decrease. After merging external records they are re-derived
from the ids actually present.
"""

import uuid

from .records import CLAIMS, FOUND_REPORTS, Store


def new_item_id() -> str:
    """Return a new globally unique item id."""
    return str(uuid.uuid4())


def next_sequence(store: Store, counter: str) -> int:
    """Return counter+1 and record the increment on the store."""
    return store.next_sequence(counter)


def resync_sequences(store: Store) -> None:
    """
    Raise each counter to at least the largest id in its collection.

    Keeps future next_sequence() calls clear of imported ids.
    """
    store.seq[FOUND_REPORTS] = max(
        store.seq.get(FOUND_REPORTS, 0),
        max((r.id for r in store.found_reports), default=0),
        0,
    )
    store.seq[CLAIMS] = max(
        store.seq.get(CLAIMS, 0),
        max((c.id for c in store.claims), default=0),
        0,
    )
