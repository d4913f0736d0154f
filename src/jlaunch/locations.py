"""Default on-disk locations."""

from pathlib import Path

JLAUNCH_DIR = Path.home() / ".jlaunch"
DEFAULT_CACHE_DIR = JLAUNCH_DIR / "cache"
DEFAULT_JAR_CACHE_DIR = DEFAULT_CACHE_DIR / "jars"
