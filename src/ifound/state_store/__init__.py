"""
State Store (SQLite-based).

Persists the whole lost-and-found store as one JSON record:
- items
- found_reports
- claims
- seq counters for found_reports and claims
"""

from .codec import StoreDecodeError, decode_records, decode_store, encode_store
from .sqlite_store import DEFAULT_RECORD_KEY, StateStore

__all__ = [
    "DEFAULT_RECORD_KEY",
    "StateStore",
    "StoreDecodeError",
    "decode_records",
    "decode_store",
    "encode_store",
]
