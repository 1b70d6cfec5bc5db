"""
Canonical records (SSOT).

Item, FoundReport and Claim are the only entity models in the system.
Persisted keys are camelCase; in-memory fields are snake_case. Each record
maps into/out of its persisted form through to_dict/from_dict.

Cross-collection references (item_id) are plain identifiers. A report or
claim may point at an item that does not exist.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    """Item category."""

    PHONES = "phones"
    WALLETS = "wallets"
    TUMBLERS = "tumblers"
    OTHER = "other"


class ItemStatus(str, Enum):
    """
    Item lifecycle.

    REGISTERED -> LOST (report verified) -> CLAIMED (owner reclaimed)
    """

    REGISTERED = "registered"
    LOST = "lost"
    CLAIMED = "claimed"


class ReportStatus(str, Enum):
    """Found report lifecycle: PENDING -> VERIFIED."""

    PENDING = "pending"
    VERIFIED = "verified"


def utc_now_iso() -> str:
    """Current UTC time as an ISO timestamp with a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _blank_to_none(value: Any) -> Optional[str]:
    """Empty strings are stored as null."""
    return value if value else None


@dataclass
class Item:
    """A registered object with an owner."""

    id: str
    item_name: Optional[str]
    student_id: Optional[str]
    owner_name: Optional[str]
    # None only on records written without a category
    category: Optional[str] = Category.OTHER.value
    strand: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    photo_path: Optional[str] = None
    status: ItemStatus = ItemStatus.REGISTERED
    created_at: Optional[str] = ""

    # Set only by the corresponding transitions
    found_photo_path: Optional[str] = None
    last_claimed_at: Optional[str] = None

    @property
    def display_photo(self) -> Optional[str]:
        """Finder photo when available, otherwise the owner photo."""
        return self.found_photo_path or self.photo_path

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted layout."""
        data: dict[str, Any] = {
            "id": self.id,
            "itemName": self.item_name,
            "studentId": self.student_id,
            "ownerName": self.owner_name,
            "category": self.category,
            "strand": self.strand,
            "email": self.email,
            "contact": self.contact,
            "photoPath": self.photo_path,
            "status": self.status.value,
            "createdAt": self.created_at,
        }
        if self.found_photo_path is not None:
            data["foundPhotoPath"] = self.found_photo_path
        if self.last_claimed_at is not None:
            data["lastClaimedAt"] = self.last_claimed_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        """Deserialize from the persisted layout."""
        return cls(
            id=str(data["id"]),
            item_name=data.get("itemName"),
            student_id=data.get("studentId"),
            owner_name=data.get("ownerName"),
            category=data.get("category", Category.OTHER.value),
            strand=data.get("strand"),
            email=data.get("email"),
            contact=data.get("contact"),
            photo_path=data.get("photoPath"),
            status=ItemStatus(data.get("status", ItemStatus.REGISTERED.value)),
            created_at=data.get("createdAt"),
            found_photo_path=data.get("foundPhotoPath"),
            last_claimed_at=data.get("lastClaimedAt"),
        )


@dataclass
class FoundReport:
    """A finder's report that an item was located."""

    id: int
    item_id: Optional[str]
    finder_name: Optional[str]
    location: Optional[str]
    photo_path: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    created_at: Optional[str] = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted layout."""
        return {
            "id": self.id,
            "itemId": self.item_id,
            "finderName": self.finder_name,
            "location": self.location,
            "photoPath": self.photo_path,
            "status": self.status.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FoundReport":
        """Deserialize from the persisted layout."""
        return cls(
            id=int(data["id"]),
            item_id=data.get("itemId"),
            finder_name=data.get("finderName"),
            location=data.get("location"),
            photo_path=data.get("photoPath"),
            status=ReportStatus(data.get("status", ReportStatus.PENDING.value)),
            created_at=data.get("createdAt"),
        )


@dataclass
class Claim:
    """An owner's reclaim of an item."""

    id: int
    item_id: Optional[str]
    claimant_name: Optional[str]
    created_at: Optional[str] = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted layout."""
        return {
            "id": self.id,
            "itemId": self.item_id,
            "claimantName": self.claimant_name,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Claim":
        """Deserialize from the persisted layout."""
        return cls(
            id=int(data["id"]),
            item_id=data.get("itemId"),
            claimant_name=data.get("claimantName"),
            created_at=data.get("createdAt"),
        )


# Sequence counter names; also the persisted collection names they cover
FOUND_REPORTS = "found_reports"
CLAIMS = "claims"


@dataclass
class Store:
    """
    Aggregate root: three ordered collections plus sequence counters.

    Insertion order is preserved. All mutation of loaded state goes through
    this object; persistence is handled by StateStore.
    """

    items: list[Item] = field(default_factory=list)
    found_reports: list[FoundReport] = field(default_factory=list)
    claims: list[Claim] = field(default_factory=list)
    seq: dict[str, int] = field(default_factory=lambda: {FOUND_REPORTS: 0, CLAIMS: 0})

    def find_item(self, item_id: str) -> Optional[Item]:
        """Exact id match, or None."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def find_report(self, report_id: int) -> Optional[FoundReport]:
        """Numeric id match, or None."""
        for report in self.found_reports:
            if report.id == report_id:
                return report
        return None

    def next_sequence(self, counter: str) -> int:
        """Advance a counter and return its new value."""
        value = self.seq.get(counter, 0) + 1
        self.seq[counter] = value
        return value

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole store. The result shares no state with self."""
        return {
            "items": [item.to_dict() for item in self.items],
            "found_reports": [report.to_dict() for report in self.found_reports],
            "claims": [claim.to_dict() for claim in self.claims],
            "seq": {
                FOUND_REPORTS: self.seq.get(FOUND_REPORTS, 0),
                CLAIMS: self.seq.get(CLAIMS, 0),
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Store":
        """Deserialize the whole store. Missing parts default to empty."""
        seq_data = data.get("seq") or {}
        return cls(
            items=[Item.from_dict(x) for x in data.get("items") or []],
            found_reports=[FoundReport.from_dict(x) for x in data.get(FOUND_REPORTS) or []],
            claims=[Claim.from_dict(x) for x in data.get(CLAIMS) or []],
            seq={
                FOUND_REPORTS: int(seq_data.get(FOUND_REPORTS) or 0),
                CLAIMS: int(seq_data.get(CLAIMS) or 0),
            },
        )
