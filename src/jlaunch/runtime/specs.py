"""Declarative specifications for JDK tools and where to look for a JDK.

This is DATA, not code. To support another JDK tool or install location,
add its spec here.
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Union


@dataclass(frozen=True)
class VersionCheck:
    """Configuration for checking a tool's version."""
    args: List[str]
    parse: str  # Regex pattern to extract version


@dataclass(frozen=True)
class ExplicitHomeDetection:
    """JDK home given by configuration or the run context."""
    type: Literal["explicit_home"] = "explicit_home"
    priority: int = 20


@dataclass(frozen=True)
class EnvHomeDetection:
    """JDK home taken from an environment variable."""
    type: Literal["env_home"] = "env_home"
    env_var: str = "JAVA_HOME"
    priority: int = 15


@dataclass(frozen=True)
class SdkmanDetection:
    """The JDK currently selected in SDKMAN."""
    type: Literal["sdkman"] = "sdkman"
    path: str = "~/.sdkman/candidates/java/current"
    priority: int = 10


@dataclass(frozen=True)
class InstalledJdksDetection:
    """JDKs installed side by side, one directory per major version."""
    type: Literal["installed_jdks"] = "installed_jdks"
    directory: str = "~/.jlaunch/jdks"
    priority: int = 5


# Union of all detection strategies
AutoDetectStrategy = Union[
    ExplicitHomeDetection,
    EnvHomeDetection,
    SdkmanDetection,
    InstalledJdksDetection,
]


@dataclass(frozen=True)
class ToolSpec:
    """Complete specification for a JDK tool."""
    display_name: str
    executable_name: str
    system_commands: List[str]
    version_check: VersionCheck
    executable_path: str = "bin/{name}"
    executable_path_win: str = "bin/{name}.exe"


JDK_DETECTION: List[AutoDetectStrategy] = [
    ExplicitHomeDetection(),
    EnvHomeDetection(env_var="JAVA_HOME"),
    SdkmanDetection(),
    InstalledJdksDetection(),
]


TOOL_SPECS: Dict[str, ToolSpec] = {
    "java": ToolSpec(
        display_name="Java launcher",
        executable_name="java",
        system_commands=["java"],
        version_check=VersionCheck(
            args=["-version"],  # Printed on stderr
            parse=r'version "([^"]+)"',
        ),
    ),
    "javac": ToolSpec(
        display_name="Java compiler",
        executable_name="javac",
        system_commands=["javac"],
        version_check=VersionCheck(
            args=["-version"],
            parse=r"javac (\S+)",
        ),
    ),
    "jshell": ToolSpec(
        display_name="JShell",
        executable_name="jshell",
        system_commands=["jshell"],
        version_check=VersionCheck(
            args=["--version"],
            parse=r"jshell (\S+)",
        ),
    ),
}


def get_tool_spec(tool: str) -> ToolSpec:
    """Get the spec for a JDK tool.

    Raises:
        ValueError: If the tool is not supported
    """
    if tool not in TOOL_SPECS:
        supported = ", ".join(TOOL_SPECS.keys())
        raise ValueError(
            f"Tool '{tool}' not supported. "
            f"Supported tools: {supported}"
        )

    return TOOL_SPECS[tool]
