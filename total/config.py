"""Base directory resolution and persisted file locations."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

BASE_DIR_NAME = ".total"
BASE_DIR_ENV = "TOTAL_HOME"


def default_base_dir() -> str:
    """~/.total, or $TOTAL_HOME when set.

    Falls back to a relative ``.total`` when the home directory cannot be
    determined.
    """
    override = os.environ.get(BASE_DIR_ENV)
    if override:
        return override
    try:
        home = Path.home()
    except RuntimeError as e:
        logger.warning(f"Could not determine home directory: {e}")
        return BASE_DIR_NAME
    return str(home / BASE_DIR_NAME)


@dataclass
class TotalConfig:
    base_dir: str = field(default_factory=default_base_dir)

    @property
    def config_path(self) -> str:
        return os.path.join(self.base_dir, "config.json")

    @property
    def friends_path(self) -> str:
        return os.path.join(self.base_dir, "friends.json")

    def ensure_dirs(self):
        Path(self.base_dir).mkdir(mode=0o700, parents=True, exist_ok=True)
