"""
SSOT schemas for the lost-and-found store.

These canonical records and views are the only models used across modules.
"""

from .categories import (
    CATEGORY_LABELS,
    category_label,
    effective_category,
    infer_category_from_name,
)
from .identifiers import new_item_id, next_sequence, resync_sequences
from .records import (
    CLAIMS,
    FOUND_REPORTS,
    Category,
    Claim,
    FoundReport,
    Item,
    ItemStatus,
    ReportStatus,
    Store,
    utc_now_iso,
)
from .views import UNKNOWN_ITEM_NAME, Analytics, ClaimView, PendingReportView

__all__ = [
    # Records
    "Category",
    "Claim",
    "FoundReport",
    "Item",
    "ItemStatus",
    "ReportStatus",
    "Store",
    "CLAIMS",
    "FOUND_REPORTS",
    "utc_now_iso",
    # Identifiers
    "new_item_id",
    "next_sequence",
    "resync_sequences",
    # Categories
    "CATEGORY_LABELS",
    "category_label",
    "effective_category",
    "infer_category_from_name",
    # Views
    "Analytics",
    "ClaimView",
    "PendingReportView",
    "UNKNOWN_ITEM_NAME",
]
