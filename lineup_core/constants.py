from __future__ import annotations
from enum import Flag
from typing import Dict, List


# -----------------------------
# Position categories
# -----------------------------
class Category(Flag):
    NONE = 0
    STRIKER = 1
    WING = 2
    MIDFIELD = 4
    BACK = 8
    DEFENSE = 16
    GOALKEEPER = 32

    ALL_FIELD = STRIKER | WING | MIDFIELD | BACK | DEFENSE
    ANY = ALL_FIELD | GOALKEEPER


CATEGORY_TOKENS: Dict[str, Category] = {
    "striker": Category.STRIKER,
    "forward": Category.STRIKER,
    "wing": Category.WING,
    "midfield": Category.MIDFIELD,
    "back": Category.BACK,
    "defense": Category.DEFENSE,
    "defence": Category.DEFENSE,
    "goalkeeper": Category.GOALKEEPER,
    "gk": Category.GOALKEEPER,
    "all": Category.ANY,
    "any": Category.ANY,
    "all except gk": Category.ALL_FIELD,
    "all except goalkeeper": Category.ALL_FIELD,
}

# -----------------------------
# Positions (9-a-side, tactical order)
# -----------------------------
GOALKEEPER = "goalkeeper"

POSITIONS: List[str] = [
    "striker", "left-wing", "right-wing",
    "center-mid-left", "center-mid-right",
    "left-back", "center-back", "right-back", GOALKEEPER,
]

POSITION_CATEGORIES: Dict[str, Category] = {
    "striker": Category.STRIKER,
    "left-wing": Category.WING,
    "right-wing": Category.WING,
    "center-mid-left": Category.MIDFIELD,
    "center-mid-right": Category.MIDFIELD,
    "left-back": Category.BACK | Category.DEFENSE,
    "center-back": Category.BACK | Category.DEFENSE,
    "right-back": Category.BACK | Category.DEFENSE,
    GOALKEEPER: Category.GOALKEEPER,
}

# Variety is judged on groups, so BACK and DEFENSE slots count as one.
GROUP_ORDER: List[Category] = [
    Category.GOALKEEPER, Category.STRIKER, Category.WING, Category.MIDFIELD, Category.BACK,
]

POSITION_ABBREVIATIONS: Dict[str, str] = {
    "striker": "ST",
    "left-wing": "LW",
    "right-wing": "RW",
    "center-mid-left": "CM",
    "center-mid-right": "CM",
    "left-back": "LB",
    "center-back": "CB",
    "right-back": "RB",
    GOALKEEPER: "GK",
}

STATUSES = ["available", "late", "injured", "absent"]
SCHEDULABLE_STATUSES = {"available", "late"}


# ---------------------
# Normalization helpers
# ---------------------
def normalize_name(s: str) -> str:
    if s is None:
        return ""
    return " ".join(s.split())


def normalize_pos(p: str) -> str:
    if not p:
        return ""
    return "-".join(p.strip().lower().replace("_", "-").split())


def parse_categories(tokens) -> Category:
    """
    Turn roster tokens ("Back", "All except GK", ...) into a Category flag set.
    Accepts a Category, a single string, or an iterable of strings.
    """
    if isinstance(tokens, Category):
        return tokens
    if isinstance(tokens, str):
        tokens = [tokens]
    out = Category.NONE
    for t in tokens or []:
        key = " ".join(str(t).strip().lower().split())
        if not key:
            continue
        if key not in CATEGORY_TOKENS:
            raise ValueError(f"Unknown position category: {t!r}")
        out |= CATEGORY_TOKENS[key]
    return out


def position_group(categories: Category) -> Category:
    """Collapse a slot requirement to the single group used for variety tracking."""
    for group in GROUP_ORDER:
        if categories & group:
            return group
    if categories & Category.DEFENSE:
        return Category.BACK
    return Category.NONE


_SINGLE = [
    Category.STRIKER, Category.WING, Category.MIDFIELD,
    Category.BACK, Category.DEFENSE, Category.GOALKEEPER,
]


def category_label(categories: Category, sep: str = ", ") -> str:
    if categories == Category.ANY:
        return "All"
    if categories == Category.ALL_FIELD:
        return "All except GK"
    return sep.join(c.name.title() for c in _SINGLE if c & categories)


# ---------------------
# Roster CSV headers
# ---------------------
CSV_HEADERS = ["Name", "Categories", "Preferred", "Status"]

HEADER_ALIASES: Dict[str, List[str]] = {
    "Name": ["player", "player name", "full name"],
    "Categories": ["category", "positions", "position categories", "skills"],
    "Preferred": ["preferred positions", "preferences", "preferred position"],
    "Status": ["availability", "available"],
}
