"""Category labels and name-based inference."""

import re

from .records import Category

CATEGORY_LABELS: dict[str, str] = {
    Category.PHONES.value: "Phone",
    Category.WALLETS.value: "Wallet",
    Category.TUMBLERS.value: "Tumbler",
    Category.OTHER.value: "Other",
}

# Checked in order; first match wins
_NAME_PATTERNS: list[tuple[re.Pattern[str], Category]] = [
    (re.compile(r"phone|iphone|android|samsung|oppo|vivo", re.IGNORECASE), Category.PHONES),
    (re.compile(r"wallet", re.IGNORECASE), Category.WALLETS),
    (re.compile(r"tumbler|bottle|hydro", re.IGNORECASE), Category.TUMBLERS),
]


def category_label(key: str | None) -> str:
    """Human label for a category key. Unknown keys are "Other"."""
    return CATEGORY_LABELS.get(key or "", "Other")


def infer_category_from_name(name: str | None) -> str:
    """Guess a category key from an item name."""
    if not name:
        return Category.OTHER.value
    for pattern, category in _NAME_PATTERNS:
        if pattern.search(name):
            return category.value
    return Category.OTHER.value


def effective_category(category: str | None, item_name: str | None) -> str:
    """Stored category, falling back to inference from the name."""
    return category or infer_category_from_name(item_name)
