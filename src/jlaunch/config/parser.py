"""Configuration file parser for jlaunch."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from ..dependencies import DEFAULT_LOCAL_REPOSITORY
from ..locations import DEFAULT_CACHE_DIR
from ..source.options import quoted_string_to_list

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("jlaunch.toml", ".jlaunch.toml")
JAVA_OPTIONS_ENV = "JLAUNCH_JAVA_OPTIONS"


@dataclass
class RunConfig:
    """Defaults applied to every launch.

    Option values are stored as single strings, the way users write them,
    and only split into arguments when asked for.
    """

    java_options: str = ""
    jshell_options: str = ""
    java_version: Optional[str] = None
    enable_cds: bool = False


@dataclass
class CacheConfig:
    """Where built archives are kept."""

    dir: Path = DEFAULT_CACHE_DIR

    @property
    def jars_dir(self) -> Path:
        return self.dir / "jars"


@dataclass
class DependenciesConfig:
    local_repository: Path = DEFAULT_LOCAL_REPOSITORY


@dataclass
class JdkConfig:
    java_home: Optional[str] = None


@dataclass
class LaunchConfig:
    """Complete jlaunch configuration."""

    run: RunConfig = field(default_factory=RunConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    dependencies: DependenciesConfig = field(default_factory=DependenciesConfig)
    jdk: JdkConfig = field(default_factory=JdkConfig)

    # Project root for resolving paths
    project_root: Path = field(default_factory=Path.cwd)

    def resolve_path(self, path_template: str) -> Path:
        """Resolve ``${PROJECT_ROOT}`` and ``~`` in a configured path."""
        result = path_template.replace("${PROJECT_ROOT}", str(self.project_root))
        return Path(result).expanduser()

    def java_options(self) -> List[str]:
        """Default Java launcher options as discrete arguments."""
        return quoted_string_to_list(self.run.java_options)

    def jshell_options(self) -> List[str]:
        """Default JShell options as discrete arguments."""
        return quoted_string_to_list(self.run.jshell_options)


def find_config_file(project_path: Path) -> Optional[Path]:
    """Find jlaunch.toml (or .jlaunch.toml) in the project root.

    Args:
        project_path: Root path of the project

    Returns:
        Path to the config file if found, None otherwise
    """
    for name in CONFIG_FILE_NAMES:
        config_file = project_path / name
        if config_file.exists():
            return config_file
    return None


def load_config(project_path: Path) -> LaunchConfig:
    """Load configuration from jlaunch.toml or use defaults.

    A ``.env`` file is honoured for environment overrides; when
    ``JLAUNCH_JAVA_OPTIONS`` is set it replaces ``run.java_options``.

    Args:
        project_path: Root path of the project

    Returns:
        LaunchConfig with loaded or default configuration
    """
    project_path = Path(project_path)
    load_dotenv(project_path / ".env")

    config = LaunchConfig(project_root=project_path)

    config_file = find_config_file(project_path)
    if config_file:
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Ignoring invalid config file {config_file}: {e}")
            data = {}
        _apply(config, data)

    env_options = os.getenv(JAVA_OPTIONS_ENV)
    if env_options is not None:
        config.run.java_options = env_options

    return config


def _apply(config: LaunchConfig, data: dict) -> None:
    """Copy parsed TOML sections onto the config."""
    if "run" in data:
        run_data = data["run"]
        config.run.java_options = run_data.get("java_options", "")
        config.run.jshell_options = run_data.get("jshell_options", "")
        config.run.java_version = run_data.get("java_version")
        config.run.enable_cds = run_data.get("enable_cds", False)

    if "cache" in data and "dir" in data["cache"]:
        config.cache.dir = config.resolve_path(data["cache"]["dir"])

    if "dependencies" in data:
        deps_data = data["dependencies"]
        if "local_repository" in deps_data:
            config.dependencies.local_repository = config.resolve_path(
                deps_data["local_repository"]
            )

    if "jdk" in data:
        java_home = data["jdk"].get("java_home")
        if java_home:
            config.jdk.java_home = str(config.resolve_path(java_home))
