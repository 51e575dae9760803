"""
ERRANDS - Errand Manager
========================
In-memory errands list: priority buckets, add/clean/remove, and the
select -> order -> filter -> truncate listing pipeline.

Each command is one load -> mutate -> persist cycle (or load -> query):

    manager = ErrandManager.open(None, settings)
    manager.add("buy milk")
    manager.persist()

Nothing is written until persist() is called.
"""

import logging
import random
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import ErrandsSettings
from .errors import ErrandsNotFoundError, ErrandsPatternError, PriorityNotFoundError
from .schema import (
    DEFAULT_PRIORITY, ErrandList, ListedErrand, Location, Order, Priority, rank_ordered
)
from .storage import read_errands, resolve_path, write_errands

logger = logging.getLogger("errands")


class ErrandManager:
    """
    Errands list held in memory.

    Buckets are keyed by Priority and always iterated in rank order
    (Emergency ... Deferred). A bucket removed by clean() stays absent
    until add() or remove() on that priority recreates it; a
    priority-scoped listing of an absent bucket raises
    PriorityNotFoundError.
    """

    def __init__(
        self,
        buckets: Optional[Dict[Priority, List[str]]] = None,
        settings: Optional[ErrandsSettings] = None,
        path: Optional[Path] = None,
    ):
        self.settings = settings or ErrandsSettings()
        self.path = path
        if buckets is None:
            buckets = ErrandList.fresh().root
        self._buckets: Dict[Priority, List[str]] = rank_ordered(buckets)

    # ========================================
    # LOAD / PERSIST
    # ========================================

    @classmethod
    def create(
        cls,
        location: Location,
        settings: Optional[ErrandsSettings] = None,
        overwrite: bool = True,
    ) -> "ErrandManager":
        """New list with all six buckets empty, written to `location` right away"""
        settings = settings or ErrandsSettings()
        path = settings.path_for(location)
        logger.info(f"Creating errands list in {location} location: {path}")

        manager = cls(settings=settings, path=path)
        write_errands(path, manager.to_errand_list(), truncate=overwrite, make_parents=True)

        logger.info(f"🚀 Created errands list: {path}")
        return manager

    @classmethod
    def open(
        cls,
        location: Optional[Location] = None,
        settings: Optional[ErrandsSettings] = None,
    ) -> "ErrandManager":
        """Load the list at `location`, or the first one found when None"""
        settings = settings or ErrandsSettings()
        path = resolve_path(location, settings)
        errands = read_errands(path)
        return cls(errands.root, settings=settings, path=path)

    def persist(self, location: Optional[Location] = None, truncate: bool = True) -> Path:
        """Write the whole list over an existing file. Resolves the target like open().

        The file must already exist, as for open(); create() is what makes
        new lists. A missing target raises ErrandsNotFoundError.
        """
        path = resolve_path(location, self.settings)
        if not path.is_file():
            raise ErrandsNotFoundError(f"Errands list not found: {path}")
        write_errands(path, self.to_errand_list(), truncate=truncate)
        self.path = path
        logger.info(f"💾 Saved errands list: {path} ({len(self)} errands)")
        return path

    def to_errand_list(self) -> ErrandList:
        return ErrandList(rank_ordered(self._buckets))

    # ========================================
    # MUTATIONS
    # ========================================

    def add(self, description: str, priority: Optional[Priority] = None) -> Priority:
        """Append `description` to its bucket (Routine by default)"""
        if priority is None:
            priority = DEFAULT_PRIORITY
        self._bucket(priority).append(description)
        logger.info(f"Added '{description}' to priority level: {priority}")
        return priority

    def clean(self, priority: Optional[Priority] = None) -> None:
        """Drop one bucket entirely, or every bucket"""
        if priority is None:
            logger.info("🧹 Cleaning all priorities")
            self._buckets.clear()
        else:
            logger.info(f"🧹 Cleaning priority: {priority}")
            self._buckets.pop(priority, None)

    def remove(self, priority: Optional[Priority], descriptions: Iterable[str]) -> int:
        """Drop entries exactly equal to any of `descriptions`. Returns how many went."""
        names = set(descriptions)
        if priority is None:
            targets = list(self._buckets.values())
        else:
            targets = [self._bucket(priority)]

        removed = 0
        for bucket in targets:
            kept = [errand for errand in bucket if errand not in names]
            removed += len(bucket) - len(kept)
            bucket[:] = kept

        logger.info(f"Removed {removed} errand(s)")
        return removed

    # ========================================
    # QUERIES
    # ========================================

    def entries(
        self,
        ignore: Optional[str] = None,
        order: Optional[Order] = None,
        priority: Optional[Priority] = None,
        count: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> List[ListedErrand]:
        """Matching errands, each tagged with the priority it came from"""
        pattern = None
        if ignore is not None:
            try:
                pattern = re.compile(ignore)
            except re.error as e:
                raise ErrandsPatternError(f"Invalid ignore pattern {ignore!r}: {e}") from e
        if count is not None and count < 0:
            raise ValueError(f"count must be >= 0, got {count}")

        # Select
        if priority is not None:
            if priority not in self._buckets:
                raise PriorityNotFoundError(priority)
            selected = [ListedErrand(priority=priority, description=d) for d in self._buckets[priority]]
        else:
            selected = [
                ListedErrand(priority=p, description=d)
                for p, bucket in self._buckets.items()
                for d in bucket
            ]

        # Order
        order = Order(order) if order is not None else Order.DESCENDING
        if order == Order.ASCENDING:
            selected.reverse()
        elif order == Order.RANDOM:
            (rng or random).shuffle(selected)

        # Filter
        if pattern is not None:
            selected = [e for e in selected if not pattern.search(e.description)]

        # Truncate
        if count is not None:
            selected = selected[:count]

        logger.debug(f"Listing {len(selected)} errand(s) in {order.value} order")
        return selected

    def list(
        self,
        ignore: Optional[str] = None,
        order: Optional[Order] = None,
        priority: Optional[Priority] = None,
        count: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> List[str]:
        """Matching errand descriptions, in display order"""
        return [e.description for e in self.entries(ignore, order, priority, count, rng)]

    @property
    def buckets(self) -> Dict[Priority, List[str]]:
        """Snapshot of the buckets, in rank order"""
        return rank_ordered(self._buckets)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    # ========================================
    # HELPER METHODS
    # ========================================

    def _bucket(self, priority: Priority) -> List[str]:
        """Bucket for `priority`, recreated empty if it was cleaned"""
        if priority not in self._buckets:
            logger.debug(f"Recreating cleaned priority: {priority}")
            self._buckets[priority] = []
            self._buckets = rank_ordered(self._buckets)
        return self._buckets[priority]
