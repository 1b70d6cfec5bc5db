"""
Item lifecycle service.

State machine per item:

    registered --(verify_report_move_to_lost)--> lost --(add_claim)--> claimed

Every operation is one load -> mutate -> save round trip through the
StateStore. Not-found conditions are reported with False/None, never raised.

Known permissive behaviour, kept on purpose:
- Verifying a report sets its item to lost whatever the item's prior status,
  and re-verifying overwrites found_photo_path (last submitted photo wins).
- Claiming an already claimed item creates another claim and overwrites
  last_claimed_at.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..schemas import (
    CLAIMS,
    FOUND_REPORTS,
    Category,
    Claim,
    FoundReport,
    Item,
    ItemStatus,
    ReportStatus,
    new_item_id,
    next_sequence,
    utc_now_iso,
)
from ..state_store import StateStore
from .queries import QueryService

logger = logging.getLogger(__name__)

_REPORT_ID_PATTERN = re.compile(r"^\d+$")


def parse_report_id(value: object) -> int | None:
    """Exact integer report id, or None.

    Accepts ints, integral floats and digit-only text. Fractional numbers, booleans and
    anything else are rejected rather than truncated.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        return int(text) if _REPORT_ID_PATTERN.match(text) else None
    return None


class LifecycleService:
    """Add, verify and claim operations with their cross-collection effects."""

    def __init__(
        self,
        state_store: StateStore,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        """Initialize the lifecycle service.

        Args:
            state_store: Persistence for the store blob.
            clock: Returns the current time as an ISO timestamp.
        """
        self.store = state_store
        self.clock = clock

    def add_item(
        self,
        item_name: str,
        student_id: str,
        owner_name: str,
        category: str | None = None,
        strand: str | None = None,
        email: str | None = None,
        contact: str | None = None,
        photo_data_url: str | None = None,
    ) -> Item:
        """Register a new item.

        Name uniqueness per owner is the caller's concern
        (see QueryService.item_name_taken); only id uniqueness is guaranteed.

        Raises:
            ValueError: If category is not one of the Category keys.
        """
        db = self.store.load()
        item = Item(
            id=new_item_id(),
            item_name=item_name,
            student_id=student_id,
            owner_name=owner_name,
            category=Category(category or Category.OTHER.value).value,
            strand=strand or None,
            email=email or None,
            contact=contact or None,
            photo_path=photo_data_url or None,
            status=ItemStatus.REGISTERED,
            created_at=self.clock(),
        )
        db.items.append(item)
        self.store.save(db)
        logger.info(f"Registered item {item.id} ({item.item_name!r}) for student {student_id!r}")
        return item

    def get_item(self, item_id: str) -> Item | None:
        """Exact id lookup."""
        return self.store.load().find_item(item_id)

    def add_found_report(
        self,
        item_id: str,
        finder_name: str,
        location: str,
        photo_data_url: str | None = None,
    ) -> FoundReport:
        """Record a finder's report.

        The item id is not checked; a dangling reference shows up as
        "Unknown" in the pending listing.
        """
        db = self.store.load()
        report = FoundReport(
            id=next_sequence(db, FOUND_REPORTS),
            item_id=item_id,
            finder_name=finder_name,
            location=location,
            photo_path=photo_data_url or None,
            status=ReportStatus.PENDING,
            created_at=self.clock(),
        )
        db.found_reports.append(report)
        self.store.save(db)
        logger.info(f"Found report {report.id} filed for item {item_id} at {location!r}")
        return report

    def verify_report_move_to_lost(self, report_id: int | str) -> bool:
        """Verify a report and publish its item on the lost listing.

        Returns:
            True on success, False if the report or its item is unknown.
            The store is left untouched on failure.
        """
        rid = parse_report_id(report_id)
        if rid is None:
            logger.warning(f"Cannot verify report {report_id!r}: not a report id")
            return False

        db = self.store.load()
        report = db.find_report(rid)
        if report is None:
            logger.warning(f"Cannot verify report {rid}: not found")
            return False
        item = db.find_item(report.item_id)
        if item is None:
            logger.warning(f"Cannot verify report {rid}: item {report.item_id} not found")
            return False

        report.status = ReportStatus.VERIFIED
        item.status = ItemStatus.LOST
        # Finder photo is preferred on the lost listing; owner photo stays as fallback
        if report.photo_path:
            item.found_photo_path = report.photo_path
        self.store.save(db)
        logger.info(f"Verified report {rid}; item {item.id} moved to lost")
        return True

    def add_claim(self, item_id: str, claimant_name: str) -> Claim | None:
        """Reclaim an item.

        Returns:
            The new Claim, or None if the item is unknown (no claim is created).
        """
        db = self.store.load()
        item = db.find_item(item_id)
        if item is None:
            logger.warning(f"Cannot claim item {item_id}: not found")
            return None

        claim = Claim(
            id=next_sequence(db, CLAIMS),
            item_id=item_id,
            claimant_name=claimant_name,
            created_at=self.clock(),
        )
        db.claims.append(claim)
        item.status = ItemStatus.CLAIMED
        item.last_claimed_at = claim.created_at
        self.store.save(db)
        logger.info(f"Claim {claim.id} recorded for item {item_id} by {claimant_name!r}")
        return claim

    def claim_as_owner(self, item_id: str, student_id: str) -> Claim | None:
        """Reclaim an item after checking the owner's student ID.

        The claimant is recorded as the item's owner name.

        Returns:
            The new Claim, or None on an unknown item or an ID mismatch.
        """
        queries = QueryService(self.store)
        if not queries.owner_matches(item_id, student_id):
            logger.warning(f"Claim refused for item {item_id}: student ID does not match")
            return None
        item = queries.get_item(item_id)
        claimant = (item.owner_name if item else "") or "Owner"
        return self.add_claim(item_id, claimant)
