"""Errands file locations, built once at startup and passed down."""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema import Location

FILE_NAME = "errands.yml"


def _user_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


class ErrandsSettings(BaseSettings):
    """Candidate errands files. Override with ERRANDS_LOCAL_PATH etc."""

    model_config = SettingsConfigDict(env_prefix="ERRANDS_", extra="ignore")

    local_path: Path = Field(default_factory=lambda: Path(".") / FILE_NAME)
    user_path: Path = Field(default_factory=lambda: _user_config_dir() / "errands" / FILE_NAME)
    global_path: Path = Field(default_factory=lambda: Path("/etc") / "errands" / FILE_NAME)

    def path_for(self, location: Location) -> Path:
        return {
            Location.LOCAL: self.local_path,
            Location.USER: self.user_path,
            Location.GLOBAL: self.global_path,
        }[Location(location)]

    def candidates(self, location: Optional[Location] = None) -> List[Path]:
        """Paths to try for `location`; all of them, in probe order, if None"""
        if location is not None:
            return [self.path_for(location)]
        return [self.path_for(loc) for loc in Location]
