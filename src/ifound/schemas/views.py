"""
Read-side projections.

These are never persisted. Joined views carry placeholder values when the
referenced item no longer exists (or never did).
"""

from dataclasses import dataclass
from typing import Any, Optional

from .records import Claim, FoundReport, Item

UNKNOWN_ITEM_NAME = "Unknown"


@dataclass
class PendingReportView:
    """A pending found report with the details of its item."""

    report: FoundReport
    item_name: str
    owner_name: str
    item_photo: Optional[str]

    @classmethod
    def join(cls, report: FoundReport, item: Optional[Item]) -> "PendingReportView":
        """Left join: a missing item yields placeholders."""
        return cls(
            report=report,
            item_name=(item.item_name if item else "") or UNKNOWN_ITEM_NAME,
            owner_name=(item.owner_name if item else "") or "",
            item_photo=(item.photo_path if item else None) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.report.to_dict()
        data.update(
            {
                "itemName": self.item_name,
                "ownerName": self.owner_name,
                "itemPhoto": self.item_photo,
            }
        )
        return data


@dataclass
class ClaimView:
    """A claim with the details of its item."""

    claim: Claim
    item_name: str
    owner_name: str
    student_id: str

    @classmethod
    def join(cls, claim: Claim, item: Optional[Item]) -> "ClaimView":
        """Left join: a missing item yields empty strings."""
        return cls(
            claim=claim,
            item_name=(item.item_name if item else "") or "",
            owner_name=(item.owner_name if item else "") or "",
            student_id=(item.student_id if item else "") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.claim.to_dict()
        data.update(
            {
                "itemName": self.item_name,
                "ownerName": self.owner_name,
                "studentId": self.student_id,
            }
        )
        return data


@dataclass
class Analytics:
    """Aggregate counts and the recovery rate (integer percent)."""

    total: int = 0
    lost: int = 0
    claimed: int = 0
    pending_reports: int = 0
    recovery_rate: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "lost": self.lost,
            "claimed": self.claimed,
            "pendingReports": self.pending_reports,
            "recoveryRate": self.recovery_rate,
        }
