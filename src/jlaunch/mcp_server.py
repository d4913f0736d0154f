"""MCP Server for jlaunch.

Exposes code inspection and launch preparation as MCP tools using FastMCP.
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp.server import FastMCP

from .config import load_config
from .errors import LaunchError
from .launcher import Launcher
from .source import RunContext, create_code, quoted_string_to_list

PROJECT_PATH_ENV = "JLAUNCH_PROJECT_PATH"

_project_path: Optional[str] = None

mcp = FastMCP("jlaunch")


def set_project_path(path: str) -> None:
    """Set the project path references are resolved against."""
    global _project_path
    _project_path = str(Path(path).resolve())


def get_project_path() -> str:
    """Get the current project path."""
    return _project_path or os.getenv(PROJECT_PATH_ENV) or os.getcwd()


def _to_dict(obj: Any) -> Any:
    """Convert dataclasses and paths into JSON friendly values."""
    if hasattr(obj, "__dataclass_fields__"):
        return _to_dict(asdict(obj))
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, (list, tuple)):
        return [_to_dict(item) for item in obj]
    elif isinstance(obj, dict):
        return {k: _to_dict(v) for k, v in obj.items()}
    return obj


@mcp.tool()
async def inspect_code(
    reference: str,
    force_jsh: bool = False,
    interactive: bool = False,
) -> Dict[str, Any]:
    """Describe a script, source file, jar or Maven coordinate.

    Args:
        reference: Path (relative to the project) or group:artifact:version
        force_jsh: Pretend the code is a JShell script
        interactive: Pretend an interactive session was requested

    Returns:
        Dict with the code's kind, jar path, entry point, options,
        Java version, dependencies and whether it needs a build.
    """
    config = await asyncio.to_thread(load_config, Path(get_project_path()))
    try:
        code = await asyncio.to_thread(create_code, reference, config)
    except (LaunchError, ValueError) as e:
        return {"error": str(e), "reference": reference}

    context = RunContext(force_jsh=force_jsh, interactive=interactive)
    return {
        "reference": reference,
        "kind": "jar" if code.as_jar() is not None else "source_set",
        "file": _to_dict(code.resource_ref.file),
        "jar_file": str(code.jar_file),
        "main_class": code.main_class,
        "runtime_options": list(code.runtime_options),
        "enable_cds": code.enable_cds,
        "java_version": code.java_version,
        "description": code.description,
        "gav": code.gav,
        "dependencies": list(code.dependencies),
        "repositories": list(code.repositories),
        "is_jar": code.is_jar(),
        "is_jshell": code.is_jshell(),
        "needs_build": code.needs_build(context),
    }


@mcp.tool()
async def split_options(text: str) -> List[str]:
    """Split an option string the way configured defaults are split.

    Examples:
        >>> split_options('-Xmx1g "-Dname=hello world"')
        ['-Xmx1g', '-Dname=hello world']
    """
    return quoted_string_to_list(text)


@mcp.tool()
async def get_launch_command(
    reference: str,
    arguments: Optional[List[str]] = None,
    interactive: bool = False,
    force_jsh: bool = False,
    fresh: bool = False,
) -> Dict[str, Any]:
    """Prepare code for launching and return the command that would run it.

    Builds the code first when it needs building. Does NOT run it.

    Args:
        reference: Path (relative to the project) or group:artifact:version
        arguments: Program arguments
        interactive: Open JShell with the code on the class path
        force_jsh: Run the file as a JShell script
        fresh: Ignore any cached build

    Returns:
        Dict with ``command``, ``built`` and ``jar_file``, or ``error``
    """
    launcher = await asyncio.to_thread(Launcher, project_path=get_project_path())
    context = RunContext(
        force_jsh=force_jsh,
        interactive=interactive,
        fresh=fresh,
        arguments=tuple(arguments or ()),
    )
    try:
        plan = await asyncio.to_thread(launcher.prepare, reference, context)
    except (LaunchError, ValueError) as e:
        return {"error": str(e), "reference": reference}

    return {
        "reference": reference,
        "command": plan.command,
        "built": plan.built,
        "jar_file": str(plan.code.jar_file),
    }


@mcp.resource("jlaunch://config")
def get_config_resource() -> str:
    """Effective configuration for the current project."""
    config = load_config(Path(get_project_path()))
    return json.dumps(_to_dict(config), indent=2)


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Run the MCP server.

    The project path can be set via:
    1. First command line argument
    2. JLAUNCH_PROJECT_PATH environment variable
    3. Current working directory (default)
    """
    if len(sys.argv) > 1 and not sys.argv[1].startswith("-"):
        set_project_path(sys.argv[1])
        # Remove the argument so FastMCP doesn't see it
        sys.argv = [sys.argv[0]] + sys.argv[2:]

    project_path = get_project_path()

    # stdout is used for the MCP protocol
    print("🚀 Starting jlaunch MCP Server", file=sys.stderr)
    print(f"📂 Project: {project_path}", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
