"""
ERRANDS - Schema Definition
===========================
Priority levels, listing/location options and the on-disk document model.

The errands file is a YAML mapping from priority name to a list of errand
descriptions:

    Emergency: []
    Urgent:
    - call bank
    Routine:
    - buy milk
    - water plants

A priority missing from the document is a cleaned bucket.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, RootModel, StrictStr, model_validator


class Priority(str, Enum):
    """Priority levels, most urgent first. Declaration order is rank order."""
    EMERGENCY = "Emergency"
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    ROUTINE = "Routine"
    DEFERRED = "Deferred"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """Accept a priority name (any case) or its rank number (0 = Emergency)"""
        text = str(text).strip()
        if text.isdigit():
            rank = int(text)
            if rank < len(_MEMBERS):
                return _MEMBERS[rank]
        else:
            for priority in cls:
                if priority.value.lower() == text.lower():
                    return priority
        raise ValueError(f"Unknown priority: {text!r}")

    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_MEMBERS: List[Priority] = list(Priority)
_RANKS: Dict[Priority, int] = {priority: rank for rank, priority in enumerate(_MEMBERS)}

DEFAULT_PRIORITY = Priority.ROUTINE


class Order(str, Enum):
    """Listing order"""
    DESCENDING = "descending"   # Rank order, Emergency first
    ASCENDING = "ascending"     # Reverse rank order
    RANDOM = "random"           # Shuffled, not reproducible


class Location(str, Enum):
    """Named errands file locations. Declaration order is probe order."""
    LOCAL = "local"     # ./errands.yml
    USER = "user"       # <config dir>/errands/errands.yml
    GLOBAL = "global"   # /etc/errands/errands.yml

    def __str__(self) -> str:
        return self.value


class ErrandList(RootModel[Dict[Priority, List[StrictStr]]]):
    """The whole errands document - THE FILE FORMAT"""

    @model_validator(mode="after")
    def rank_order(self) -> "ErrandList":
        # Keys are kept in rank order whatever order the file used
        self.root = {p: self.root[p] for p in sorted(self.root, key=lambda p: p.rank)}
        return self

    @classmethod
    def fresh(cls) -> "ErrandList":
        return cls({priority: [] for priority in Priority})

    def to_document(self) -> Dict[str, List[str]]:
        return {priority.value: list(items) for priority, items in self.root.items()}


class ListedErrand(BaseModel):
    """One errand selected by a listing, tagged with the bucket it came from"""
    priority: Priority
    description: str

    def __str__(self) -> str:
        return self.description


def rank_ordered(buckets: Dict[Priority, List[str]]) -> Dict[Priority, List[str]]:
    """Copy of `buckets` with keys in rank order"""
    return {p: list(buckets[p]) for p in _MEMBERS if p in buckets}
