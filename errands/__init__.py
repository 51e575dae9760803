"""
ERRANDS - Priority-bucketed To-Do List
======================================

Personal to-do list kept in a small YAML file, with errands bucketed by
priority (Emergency, Urgent, High, Medium, Routine, Deferred).

Usage:
    from errands import ErrandManager, Location, Priority

    manager = ErrandManager.create(Location.LOCAL)
    manager.add("call bank", Priority.URGENT)
    manager.add("buy milk")                 # Routine
    manager.persist()

    manager = ErrandManager.open()          # local -> user -> global
    print(manager.list(ignore="^call"))
"""

from .schema import (
    Priority,
    Order,
    Location,
    ErrandList,
    ListedErrand,
    DEFAULT_PRIORITY,
)

from .config import ErrandsSettings
from .errors import (
    ErrandsError,
    ErrandsIOError,
    ErrandsNotFoundError,
    ErrandsExistsError,
    ErrandsParseError,
    PriorityNotFoundError,
    ErrandsPatternError,
)
from .manager import ErrandManager

__version__ = "0.1.0"
__all__ = [
    "ErrandManager",
    "ErrandsSettings",
    "Priority",
    "Order",
    "Location",
    "ErrandList",
    "ListedErrand",
    "DEFAULT_PRIORITY",
    "ErrandsError",
    "ErrandsIOError",
    "ErrandsNotFoundError",
    "ErrandsExistsError",
    "ErrandsParseError",
    "PriorityNotFoundError",
    "ErrandsPatternError",
]
