"""
ERRANDS - Persistence
=====================
Reads and writes the errands YAML file and resolves which file a command
operates on.

When no location is given, candidates are probed in a fixed order and the
first existing file wins:

    1. local   ./errands.yml
    2. user    <config dir>/errands/errands.yml
    3. global  /etc/errands/errands.yml

Writes go to a temporary file that is renamed over the target while an
advisory lock is held on <file>.lock. Concurrent writers are serialized but
the last one still wins.
"""

import fcntl
import logging
import os
import stat
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .config import ErrandsSettings
from .errors import ErrandsExistsError, ErrandsIOError, ErrandsNotFoundError, ErrandsParseError
from .schema import ErrandList, Location

logger = logging.getLogger("errands")


# ========================================
# LOCATION RESOLUTION
# ========================================

def resolve_path(location: Optional[Location], settings: ErrandsSettings) -> Path:
    """Path for `location`, or the first existing candidate when None"""
    if location is not None:
        path = settings.path_for(location)
        logger.debug(f"Using errands list in {location} location: {path}")
        return path

    logger.debug("List location not specified, probing local -> user -> global")
    for loc, path in zip(Location, settings.candidates()):
        if path.is_file():
            logger.debug(f"Found errands list in {loc} location: {path}")
            return path

    raise ErrandsNotFoundError(
        "Errands list not found (tried: "
        + ", ".join(str(p) for p in settings.candidates())
        + ")"
    )


# ========================================
# YAML LOADING
# ========================================

class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a mapping key given twice"""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # Unhashable key, left for SafeLoader to reject
                continue
            if duplicate:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    f"found duplicate key {key!r}", key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


# ========================================
# READ / WRITE
# ========================================

def read_errands(path: Path) -> ErrandList:
    """Load and validate the errands file at `path`"""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.load(f, Loader=UniqueKeyLoader)
    except FileNotFoundError as e:
        raise ErrandsNotFoundError(f"Errands list not found: {path}") from e
    except UnicodeDecodeError as e:
        raise ErrandsParseError(f"Malformed errands list {path}: {e}") from e
    except OSError as e:
        raise ErrandsIOError(f"Cannot read errands list {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ErrandsParseError(f"Malformed errands list {path}: {e}") from e

    if not isinstance(raw, dict):
        kind = "empty document" if raw is None else type(raw).__name__
        raise ErrandsParseError(
            f"Malformed errands list {path}: expected a priority mapping, got {kind}"
        )

    try:
        errands = ErrandList.model_validate(raw)
    except ValidationError as e:
        raise ErrandsParseError(f"Malformed errands list {path}: {e}") from e

    logger.debug(f"📂 Loaded errands list: {path} ({len(errands.root)} priorities)")
    return errands


def write_errands(
    path: Path,
    errands: ErrandList,
    truncate: bool = True,
    make_parents: bool = False,
) -> None:
    """Write `errands` to `path`, replacing its contents.

    With truncate=False an existing non-empty file is left alone and
    ErrandsExistsError is raised.

    A symlinked file is written through to its target and keeps its
    permission bits. The <file>.lock sidecar stays next to the target
    after the write.
    """
    path = Path(path)
    try:
        if make_parents:
            path.parent.mkdir(parents=True, exist_ok=True)
        path = path.resolve()

        lock_path = path.with_name(path.name + ".lock")
        with open(lock_path, "w") as lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                if not truncate and path.exists() and path.stat().st_size > 0:
                    raise ErrandsExistsError(f"Errands list already exists: {path}")

                temp_path = path.with_name(path.name + ".tmp")
                with open(temp_path, "w", encoding="utf-8") as f:
                    yaml.safe_dump(
                        errands.to_document(),
                        f,
                        sort_keys=False,
                        default_flow_style=False,
                        allow_unicode=True,
                    )
                if path.exists():
                    os.chmod(temp_path, stat.S_IMODE(path.stat().st_mode))
                os.replace(temp_path, path)
            finally:
                fcntl.flock(lock_file, fcntl.LOCK_UN)
    except ErrandsIOError:
        raise
    except OSError as e:
        raise ErrandsIOError(f"Cannot write errands list {path}: {e}") from e

    logger.debug(f"💾 Saved errands list: {path}")
