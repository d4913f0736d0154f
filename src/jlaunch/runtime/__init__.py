"""JDK tool resolution (java, javac, jshell)."""

from .resolver import JdkResolver, java_major_version, satisfies_version
from .specs import TOOL_SPECS
from .types import RuntimeInfo

__all__ = [
    "JdkResolver",
    "RuntimeInfo",
    "TOOL_SPECS",
    "java_major_version",
    "satisfies_version",
]
