# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from errands import ErrandManager, ErrandsSettings, Location, Priority


@pytest.fixture()
def settings(tmp_path: Path) -> ErrandsSettings:
    """
    Settings with every location inside tmp_path.

    The user/global parents do not exist until something creates them, so
    probing sees only what a test writes.
    """
    return ErrandsSettings(
        local_path=tmp_path / "cwd" / "errands.yml",
        user_path=tmp_path / "config" / "errands" / "errands.yml",
        global_path=tmp_path / "etc" / "errands" / "errands.yml",
    )


@pytest.fixture()
def scenario(settings: ErrandsSettings) -> ErrandManager:
    """Urgent=['call bank'], Routine=['buy milk', 'water plants']"""
    manager = ErrandManager.create(Location.LOCAL, settings)
    manager.add("call bank", Priority.URGENT)
    manager.add("buy milk", Priority.ROUTINE)
    manager.add("water plants")
    return manager
