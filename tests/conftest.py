"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest

from jlaunch.dependencies import MavenCoordinate
from jlaunch.runtime import JdkResolver, RuntimeInfo

HELLO_JAVA = """\
///usr/bin/env jlaunch "$0" "$@" ; exit $?
//DEPS info.picocli:picocli:4.7.5
//JAVA 17+
//JAVA_OPTIONS -Xmx256m "-Dgreeting=hello world"
//DESCRIPTION Says hello

package demo;

public class hello {
    public static void main(String[] args) {
        System.out.println("Hello " + System.getProperty("greeting"));
    }
}
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project directory whose config keeps caches inside it.

    Creates:
        project/
            jlaunch.toml
    """
    project = tmp_path / "project"
    project.mkdir()
    (project / "jlaunch.toml").write_text(
        """
[cache]
dir = "${PROJECT_ROOT}/.cache"

[dependencies]
local_repository = "${PROJECT_ROOT}/m2"
"""
    )
    (project / "m2").mkdir()
    return project


@pytest.fixture
def local_repository(project_dir: Path) -> Path:
    return project_dir / "m2"


@pytest.fixture
def install_artifact(local_repository: Path) -> Callable[[str], Path]:
    """Put a (fake) artifact for a coordinate into the local repository."""

    def install(coordinate: str) -> Path:
        artifact = MavenCoordinate.parse(coordinate).repository_path(local_repository)
        artifact.parent.mkdir(parents=True, exist_ok=True)
        artifact.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
        return artifact

    return install


@pytest.fixture
def hello_java(project_dir: Path) -> Path:
    """A single-file Java script with directives."""
    path = project_dir / "hello.java"
    path.write_text(HELLO_JAVA)
    return path


@pytest.fixture
def fake_jdk() -> MagicMock:
    """A JdkResolver that resolves every tool to /jdk/bin/<tool>."""

    def resolve_tool(tool, java_version=None):
        return RuntimeInfo(
            tool=tool,
            path=f"/jdk/bin/{tool}",
            source="explicit_config",
            version="21.0.2",
            java_home="/jdk",
        )

    resolver = MagicMock(spec=JdkResolver)
    resolver.resolve_tool.side_effect = resolve_tool
    return resolver
