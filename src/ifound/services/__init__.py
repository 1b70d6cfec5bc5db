"""Services: item lifecycle, read-side queries, and snapshot transfer."""

from .lifecycle import LifecycleService
from .queries import ALL_CATEGORIES, QueryService
from .transfer import DEFAULT_EXPORT_FILENAME, TransferService

__all__ = [
    "ALL_CATEGORIES",
    "DEFAULT_EXPORT_FILENAME",
    "LifecycleService",
    "QueryService",
    "TransferService",
]
