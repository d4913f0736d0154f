"""Data types for JDK tool resolution."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RuntimeInfo:
    """Information about a resolved JDK tool.

    Attributes:
        tool: Tool name (e.g., "java", "javac", "jshell")
        path: Absolute path to the tool executable
        source: How the tool was found
        version: Version string reported by the tool (if available)
        java_home: JDK installation directory the tool belongs to (if known)
    """

    tool: str
    path: str
    source: str  # "explicit_config", "auto_detect_java_home", "system", etc.
    version: Optional[str] = None
    java_home: Optional[str] = None

    @property
    def major_version(self) -> Optional[int]:
        from .resolver import java_major_version

        return java_major_version(self.version)

    def __repr__(self) -> str:
        version_str = f" v{self.version}" if self.version else ""
        return f"<RuntimeInfo {self.tool}{version_str} @ {self.path} ({self.source})>"
