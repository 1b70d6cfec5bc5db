"""
Snapshot export and merge-import.

Import never overwrites or deletes: an incoming record is added only when
no existing record in the same collection shares its id. Sequence counters
are re-derived afterwards so new ids never collide with imported ones.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..schemas import CLAIMS, FOUND_REPORTS, Claim, FoundReport, Item, resync_sequences
from ..state_store import StateStore, decode_records

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "ifound-export.json"

# Persisted collection name -> record decoder
_COLLECTIONS: list[tuple[str, Callable[[dict[str, Any]], Any]]] = [
    ("items", Item.from_dict),
    (FOUND_REPORTS, FoundReport.from_dict),
    (CLAIMS, Claim.from_dict),
]


class TransferService:
    """Whole-store export and non-destructive import."""

    def __init__(self, state_store: StateStore) -> None:
        self.store = state_store

    def export_all(self) -> dict[str, Any]:
        """Return the whole store as plain data.

        The result is a fresh structure; mutating it does not affect the store.
        """
        return self.store.load().to_dict()

    def import_merge(self, snapshot: Any) -> bool:
        """Merge an exported snapshot into the store.

        Returns:
            False if the snapshot is not an object or one of its collections
            is not a list. True otherwise, even if nothing was merged.
        """
        if not isinstance(snapshot, dict):
            logger.warning(f"Import rejected: snapshot is a {type(snapshot).__name__}")
            return False
        for key, _ in _COLLECTIONS:
            incoming = snapshot.get(key)
            if incoming is not None and not isinstance(incoming, list):
                logger.warning(f"Import rejected: '{key}' is not a list")
                return False

        db = self.store.load()
        merged: dict[str, int] = {}
        for key, decode in _COLLECTIONS:
            existing = getattr(db, key)
            seen = {record.id for record in existing}
            added = 0
            for record in decode_records(key, snapshot.get(key) or [], decode):
                if record.id in seen:
                    continue
                existing.append(record)
                seen.add(record.id)
                added += 1
            merged[key] = added

        resync_sequences(db)
        self.store.save(db)
        logger.info(
            f"Import merged items={merged['items']}, "
            f"found_reports={merged[FOUND_REPORTS]}, claims={merged[CLAIMS]}"
        )
        return True

    def export_to_file(self, path: Path) -> Path:
        """Write the export as indented JSON. Returns the path written."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.export_all(), f, indent=2, ensure_ascii=False)
        logger.info(f"Exported store to {path}")
        return path

    def import_from_file(self, path: Path) -> bool:
        """Merge a JSON export file. Unparseable JSON returns False."""
        with open(path, encoding="utf-8") as f:
            text = f.read()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Import rejected: {path} is not valid JSON ({e})")
            return False
        return self.import_merge(data)
