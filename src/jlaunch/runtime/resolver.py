"""Resolver for the JDK tools needed to build and launch code."""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ..errors import JdkNotFoundError
from .specs import (
    JDK_DETECTION,
    AutoDetectStrategy,
    InstalledJdksDetection,
    ToolSpec,
    get_tool_spec,
)
from .types import RuntimeInfo

logger = logging.getLogger(__name__)


def java_major_version(version: Optional[str]) -> Optional[int]:
    """Extract the feature release from a Java version string.

    Handles both the legacy ``1.8.0_292`` scheme and the current
    ``17.0.2`` / ``21`` scheme.
    """
    if not version:
        return None
    match = re.match(r"(\d+)(?:\.(\d+))?", version.strip())
    if not match:
        return None
    major = int(match.group(1))
    if major == 1 and match.group(2):
        return int(match.group(2))
    return major


def satisfies_version(version: Optional[str], requested: Optional[str]) -> bool:
    """Check a tool version against a requested constraint.

    ``"17"`` requires exactly major 17, ``"17+"`` requires 17 or later.
    No constraint is always satisfied; an unknown version never satisfies one.
    """
    if not requested:
        return True
    requested = requested.strip()
    open_ended = requested.endswith("+")
    wanted = java_major_version(requested.rstrip("+"))
    actual = java_major_version(version)
    if wanted is None or actual is None:
        return False
    if open_ended:
        return actual >= wanted
    return actual == wanted


class JdkResolver:
    """Finds JDK tools (java, javac, jshell) honouring a version constraint.

    Detection order follows ``JDK_DETECTION`` priorities, then falls back
    to whatever is on the system PATH.
    """

    def __init__(self, java_home: Optional[Union[str, Path]] = None):
        """Initialize resolver.

        Args:
            java_home: Explicit JDK installation, checked before anything else
        """
        self.java_home = Path(java_home).expanduser() if java_home else None

    def resolve_tool(self, tool: str, java_version: Optional[str] = None) -> RuntimeInfo:
        """Resolve a JDK tool.

        Args:
            tool: Tool name ("java", "javac" or "jshell")
            java_version: Optional version constraint ("17" or "17+")

        Returns:
            RuntimeInfo for the first candidate that satisfies the constraint

        Raises:
            ValueError: If the tool is unknown
            JdkNotFoundError: If no candidate matches
        """
        spec = get_tool_spec(tool)

        for source, executable, home in self._candidates(spec, java_version):
            version = self._get_version(str(executable), spec)
            if not satisfies_version(version, java_version):
                logger.debug(
                    f"Skipping {executable} ({source}): version {version} "
                    f"does not satisfy {java_version}"
                )
                continue
            logger.debug(f"Using {executable} ({source}, version {version})")
            return RuntimeInfo(
                tool=tool,
                path=str(executable),
                source=source,
                version=version,
                java_home=str(home) if home else None,
            )

        requirement = f" matching Java {java_version}" if java_version else ""
        raise JdkNotFoundError(
            f"{spec.display_name} ({spec.executable_name}){requirement} not found.\n\n"
            f"Tried:\n"
            f"  1. Explicit java_home in jlaunch.toml\n"
            f"  2. $JAVA_HOME\n"
            f"  3. SDKMAN current Java\n"
            f"  4. Installed JDKs in ~/.jlaunch/jdks\n"
            f"  5. System {spec.executable_name}\n\n"
            f"Please install a JDK or configure it in jlaunch.toml:\n"
            f"  [jdk]\n"
            f"  java_home = \"/path/to/jdk\""
        )

    def _candidates(
        self,
        spec: ToolSpec,
        java_version: Optional[str],
    ) -> Iterator[Tuple[str, Path, Optional[Path]]]:
        """Yield (source, executable, java_home) in detection order."""
        sorted_rules = sorted(JDK_DETECTION, key=lambda r: r.priority, reverse=True)

        for rule in sorted_rules:
            for home in self._apply_detection_rule(rule, java_version):
                executable = self._executable_in_home(home, spec)
                if executable:
                    yield f"auto_detect_{rule.type}", executable, home

        for cmd in spec.system_commands:
            path = shutil.which(cmd)
            if path:
                yield "system", Path(path), None

    def _apply_detection_rule(
        self,
        rule: AutoDetectStrategy,
        java_version: Optional[str],
    ) -> List[Path]:
        """Apply a single detection rule, returning candidate JDK homes."""
        rule_type = rule.type

        if rule_type == "explicit_home":
            return [self.java_home] if self.java_home else []
        elif rule_type == "env_home":
            value = os.environ.get(rule.env_var)
            return [Path(value).expanduser()] if value else []
        elif rule_type == "sdkman":
            path = Path(rule.path).expanduser()
            return [path] if path.is_dir() else []
        elif rule_type == "installed_jdks":
            return self._detect_installed_jdks(rule, java_version)

        return []

    def _detect_installed_jdks(
        self,
        rule: InstalledJdksDetection,
        java_version: Optional[str],
    ) -> List[Path]:
        """List installed JDK directories, newest first, requested one first."""
        directory = Path(rule.directory).expanduser()
        if not directory.is_dir():
            return []

        homes = [child for child in directory.iterdir() if child.is_dir()]
        homes.sort(key=lambda p: java_major_version(p.name) or 0, reverse=True)

        wanted = java_major_version((java_version or "").rstrip("+"))
        if wanted is not None:
            homes.sort(key=lambda p: java_major_version(p.name) != wanted)

        return homes

    def _executable_in_home(self, home: Path, spec: ToolSpec) -> Optional[Path]:
        """Locate a tool inside a JDK home."""
        for template in (spec.executable_path, spec.executable_path_win):
            candidate = home / template.format(name=spec.executable_name)
            if candidate.exists():
                return candidate
        return None

    def _get_version(self, executable: str, spec: ToolSpec) -> Optional[str]:
        """Get version of an executable."""
        version_check = spec.version_check
        if not version_check:
            return None

        try:
            result = subprocess.run(
                [executable] + version_check.args,
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"Version check failed for {executable}: {e}")
            return None

        output = result.stdout + result.stderr
        match = re.search(version_check.parse, output)
        if match:
            return match.group(1)

        return None
