"""
Read-only queries over the store.

Every call loads the latest persisted state; nothing here saves.
Listings are sorted by createdAt, newest first. Python's sort is stable,
so records with equal timestamps keep their insertion order.
"""

from __future__ import annotations

from ..schemas import (
    Analytics,
    ClaimView,
    Item,
    ItemStatus,
    PendingReportView,
    ReportStatus,
    effective_category,
)
from ..state_store import StateStore

ALL_CATEGORIES = "all"


class QueryService:
    """Filtering, sorting, joins and analytics."""

    def __init__(self, state_store: StateStore) -> None:
        self.store = state_store

    def get_item(self, item_id: str) -> Item | None:
        """Exact id lookup."""
        return self.store.load().find_item(item_id)

    def list_items_by_student(self, student_id: str) -> list[Item]:
        """Items of one owner. The id is matched exactly (no trim, case-sensitive)."""
        db = self.store.load()
        items = [item for item in db.items if item.student_id == student_id]
        return sorted(items, key=lambda x: x.created_at or "", reverse=True)

    def list_lost_items(self) -> list[Item]:
        """Items currently on the lost listing."""
        db = self.store.load()
        items = [item for item in db.items if item.status == ItemStatus.LOST]
        return sorted(items, key=lambda x: x.created_at or "", reverse=True)

    def search_lost_items(self, search: str = "", category: str = ALL_CATEGORIES) -> list[Item]:
        """Lost listing filtered by free text and category.

        Args:
            search: Case-insensitive substring of "<item name> <owner name>".
            category: Category key, or "all".
        """
        needle = (search or "").strip().lower()
        wanted = (category or ALL_CATEGORIES).lower()
        results = []
        for item in self.list_lost_items():
            haystack = f"{item.item_name or ''} {item.owner_name or ''}".lower()
            if needle not in haystack:
                continue
            if wanted != ALL_CATEGORIES and effective_category(item.category, item.item_name) != wanted:
                continue
            results.append(item)
        return results

    def list_pending_reports_with_item(self) -> list[PendingReportView]:
        """Pending reports joined with their items."""
        db = self.store.load()
        reports = [r for r in db.found_reports if r.status == ReportStatus.PENDING]
        reports = sorted(reports, key=lambda x: x.created_at or "", reverse=True)
        return [PendingReportView.join(r, db.find_item(r.item_id)) for r in reports]

    def list_claims_with_item(self) -> list[ClaimView]:
        """All claims joined with their items."""
        db = self.store.load()
        claims = sorted(db.claims, key=lambda x: x.created_at or "", reverse=True)
        return [ClaimView.join(c, db.find_item(c.item_id)) for c in claims]

    def analytics(self) -> Analytics:
        """Counts and recovery rate (percent of items claimed, rounded half-up)."""
        db = self.store.load()
        total = len(db.items)
        lost = sum(1 for i in db.items if i.status == ItemStatus.LOST)
        claimed = sum(1 for i in db.items if i.status == ItemStatus.CLAIMED)
        pending = sum(1 for r in db.found_reports if r.status == ReportStatus.PENDING)
        # Integer half-up rounding; round() would round half to even
        recovery_rate = (200 * claimed + total) // (2 * total) if total else 0
        return Analytics(
            total=total,
            lost=lost,
            claimed=claimed,
            pending_reports=pending,
            recovery_rate=recovery_rate,
        )

    def item_name_taken(self, student_id: str, item_name: str) -> bool:
        """True if the student already has an item with this name (trimmed, any case)."""
        wanted = (item_name or "").strip().lower()
        return any(
            (item.item_name or "").strip().lower() == wanted
            for item in self.list_items_by_student(student_id)
        )

    def owner_matches(self, item_id: str, student_id: str) -> bool:
        """True if the trimmed student ID matches the item's registered owner."""
        item = self.get_item(item_id)
        if item is None:
            return False
        return (student_id or "").strip() == (item.student_id or "").strip()
