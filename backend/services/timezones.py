"""Free-text timezone labels -> UTC offsets.

Survey answers use a handful of fixed labels (two generations of surveys),
but imported spreadsheets also contain hand-typed variants. Exact labels are
looked up first, then known abbreviations are searched for inside the label.
Anything else resolves to UTC (offset 0) and is logged once per label.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Exact survey labels, current and legacy vocabularies
TIMEZONE_OFFSETS: dict[str, float] = {
    # Current survey
    "Central Europe (CET)": 1,
    "UK / Ireland (GMT)": 0,
    "US – Pacific Time (PST)": -8,
    "US – Central Time (CST)": -6,
    "US – Eastern Time (EST)": -5,
    "Australia (AEST)": 10,
    # Legacy survey
    "Europe (CET/CEST)": 1,
    "UK (GMT/BST)": 0,
    "US Pacific (PST/PDT)": -8,
    "US Central (CT/CDT)": -6,
    "US Eastern (EST/EDT)": -5,
    "Australia (AET/AEDT)": 10,
}

# Abbreviation fallback, checked in order against whole words of the label
_KEYWORD_OFFSETS: list[tuple[frozenset[str], float]] = [
    (frozenset({"cet", "cest"}), 1),
    (frozenset({"gmt", "bst"}), 0),
    (frozenset({"ct", "cdt", "cst"}), -6),
    (frozenset({"est", "edt"}), -5),
    (frozenset({"pst", "pdt"}), -8),
    (frozenset({"aet", "aedt", "aest"}), 10),
]

_WORD_RE = re.compile(r"[a-z]+")

# One entry per distinct unrecognized label for the life of the process
_warned_labels: set[str] = set()


def _keyword_offset(label: str) -> float | None:
    words = set(_WORD_RE.findall(label.lower()))
    for keywords, offset in _KEYWORD_OFFSETS:
        if words & keywords:
            return offset
    return None


def resolve_offset_hours(label: str | None) -> float:
    """Return the signed UTC offset for a timezone label, 0 if unrecognized."""
    if not label or not label.strip():
        return 0
    label = label.strip()

    offset = TIMEZONE_OFFSETS.get(label)
    if offset is not None:
        return offset

    offset = _keyword_offset(label)
    if offset is not None:
        return offset

    if label not in _warned_labels:
        _warned_labels.add(label)
        logger.warning("Unrecognized timezone label %r, treating as UTC", label)
    return 0


def is_known_label(label: str | None) -> bool:
    """True when the label resolves without falling back to the UTC default."""
    if not label or not label.strip():
        return False
    label = label.strip()
    return label in TIMEZONE_OFFSETS or _keyword_offset(label) is not None


def distance_hours(label_a: str | None, label_b: str | None) -> float:
    """Absolute difference in hours between two timezone labels."""
    return abs(resolve_offset_hours(label_a) - resolve_offset_hours(label_b))
