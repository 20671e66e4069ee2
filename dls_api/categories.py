# dls_api/categories.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

G50_FULL = 245
G50_OTHER = 200


class MatchCategory(str, Enum):
    """
    Highest grade the competing teams are eligible to play, NOT the grade
    of this particular fixture: a full member playing a warm-up against an
    invitational XI is still ICC_FULL_MEMBER.

    Current playing conditions only distinguish two G50 values: full
    members and first-class teams (245) and everybody else (200).
    """
    ICC_FULL_MEMBER = "icc_full_member"
    FIRST_CLASS = "first_class"
    U19_INTERNATIONAL = "u19_international"
    U15_INTERNATIONAL = "u15_international"
    WOMENS_INTERNATIONAL = "womens_international"
    ICC_ASSOCIATE_MEMBER = "icc_associate_member"


_G50_BY_CATEGORY: Dict[MatchCategory, int] = {
    MatchCategory.ICC_FULL_MEMBER: G50_FULL,
    MatchCategory.FIRST_CLASS: G50_FULL,
    MatchCategory.U19_INTERNATIONAL: G50_OTHER,
    MatchCategory.U15_INTERNATIONAL: G50_OTHER,
    MatchCategory.WOMENS_INTERNATIONAL: G50_OTHER,
    MatchCategory.ICC_ASSOCIATE_MEMBER: G50_OTHER,
}


def parse_category(raw: object) -> Optional[MatchCategory]:
    """
    Accepts a MatchCategory, its value ("icc_full_member") or its name
    ("ICC_FULL_MEMBER"). Returns None when nothing matches.
    """
    if isinstance(raw, MatchCategory):
        return raw
    if raw is None:
        return None

    s = str(raw).strip()
    if not s:
        return None

    key = s.lower().replace("-", "_").replace(" ", "_")
    for c in MatchCategory:
        if c.value == key:
            return c
    return None


def g50_for(category: MatchCategory) -> int:
    return _G50_BY_CATEGORY[category]


def list_categories() -> List[dict]:
    return [{"category": c.value, "g50": g50_for(c)} for c in MatchCategory]
