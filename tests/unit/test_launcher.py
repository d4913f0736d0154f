"""Unit tests for the launcher's prepare/run cycle."""

from unittest.mock import MagicMock, patch

import pytest

from jlaunch.config import load_config
from jlaunch.errors import LaunchError, ResourceNotFoundError
from jlaunch.launcher import LaunchPlan, Launcher
from jlaunch.runtime import JdkResolver, RuntimeInfo
from jlaunch.source import RunContext
from tests.helpers.build_helpers import fake_javac


def fake_resolve_tool(tool, java_version=None):
    return RuntimeInfo(tool=tool, path=f"/jdk/bin/{tool}", source="system", version="21.0.2")


@pytest.fixture
def jdk():
    with patch.object(JdkResolver, "resolve_tool", side_effect=fake_resolve_tool) as mock:
        yield mock


@pytest.fixture
def app_jar(project_dir):
    path = project_dir / "app.jar"
    path.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    return path


def add_run_config(project_dir, text):
    config_file = project_dir / "jlaunch.toml"
    config_file.write_text(config_file.read_text() + "\n[run]\n" + text)


class TestPrepare:
    def test_jar_runs_without_build(self, project_dir, app_jar, jdk):
        plan = Launcher(project_path=project_dir).prepare(
            "app.jar", RunContext(arguments=("one", "two"))
        )

        assert plan.built is False
        assert plan.command == ["/jdk/bin/java", "-jar", str(app_jar), "one", "two"]

    @patch("subprocess.run", side_effect=fake_javac)
    def test_java_source_is_built(self, mock_run, project_dir, hello_java, install_artifact, jdk):
        install_artifact("info.picocli:picocli:4.7.5")

        plan = Launcher(project_path=project_dir).prepare("hello.java")

        assert plan.built is True
        assert plan.code.jar_file.is_file()
        assert plan.code.jar_file.is_relative_to(project_dir / ".cache" / "jars")
        cmd = plan.command
        assert cmd[0] == "/jdk/bin/java"
        assert "-Dgreeting=hello world" in cmd
        assert cmd[cmd.index("-classpath") + 1].startswith(str(plan.code.jar_file))
        assert cmd[-1] == "demo.hello"
        jdk.assert_any_call("javac", "17+")
        jdk.assert_any_call("java", "17+")

    def test_config_java_options_come_first(self, project_dir, app_jar, jdk):
        add_run_config(project_dir, "java_options = '-Xmx1g'\n")

        plan = Launcher(project_path=project_dir).prepare(
            "app.jar", RunContext(runtime_options=("-Xmx2g",))
        )

        assert plan.command[:3] == ["/jdk/bin/java", "-Xmx1g", "-Xmx2g"]
        assert plan.context.runtime_options == ("-Xmx1g", "-Xmx2g")

    def test_config_java_version_fallback(self, project_dir, app_jar, jdk):
        add_run_config(project_dir, "java_version = '21'\n")

        Launcher(project_path=project_dir).prepare("app.jar")

        jdk.assert_called_once_with("java", "21")

    @patch("subprocess.run", side_effect=fake_javac)
    def test_code_java_version_beats_config(
        self, mock_run, project_dir, hello_java, install_artifact, jdk
    ):
        install_artifact("info.picocli:picocli:4.7.5")
        add_run_config(project_dir, "java_version = '11'\n")

        plan = Launcher(project_path=project_dir).prepare("hello.java")

        assert plan.context.java_version is None
        jdk.assert_any_call("java", "17+")

    def test_config_enables_cds(self, project_dir, app_jar, jdk):
        add_run_config(project_dir, "enable_cds = true\n")

        plan = Launcher(project_path=project_dir).prepare("app.jar")

        assert plan.context.enable_cds is True
        assert any(arg.startswith("-XX:ArchiveClassesAtExit=") for arg in plan.command)

    def test_explicit_cds_off_wins(self, project_dir, app_jar, jdk):
        add_run_config(project_dir, "enable_cds = true\n")

        plan = Launcher(project_path=project_dir).prepare(
            "app.jar", RunContext(enable_cds=False)
        )

        assert not any(arg.startswith("-XX:") for arg in plan.command)

    @patch("subprocess.run")
    def test_interactive_skips_build(
        self, mock_run, project_dir, hello_java, install_artifact, jdk
    ):
        artifact = install_artifact("info.picocli:picocli:4.7.5")

        plan = Launcher(project_path=project_dir).prepare(
            "hello.java", RunContext(interactive=True)
        )

        mock_run.assert_not_called()
        assert plan.built is False
        assert plan.command[0] == "/jdk/bin/jshell"
        assert str(artifact) in plan.command
        assert plan.command[-1] == str(hello_java)

    def test_config_local_repository_used(self, project_dir, install_artifact, jdk):
        artifact = install_artifact("com.example:tool:1.0")

        plan = Launcher(project_path=project_dir).prepare("com.example:tool:1.0")

        assert plan.context.local_repository == project_dir / "m2"
        assert plan.command == ["/jdk/bin/java", "-jar", str(artifact)]

    def test_missing_reference(self, project_dir, jdk):
        with pytest.raises(ResourceNotFoundError):
            Launcher(project_path=project_dir).prepare("nope.java")

    def test_explicit_config(self, project_dir, app_jar, jdk):
        config = load_config(project_dir)
        config.run.java_options = "-Dexplicit=yes"

        plan = Launcher(config=config).prepare("app.jar")

        assert "-Dexplicit=yes" in plan.command


class TestRun:
    @patch("subprocess.run")
    def test_returns_exit_code(self, mock_run, project_dir):
        mock_run.return_value = MagicMock(returncode=3)
        plan = LaunchPlan(code=MagicMock(), context=RunContext(), command=["/jdk/bin/java", "-version"])

        assert Launcher(project_path=project_dir).run(plan) == 3
        mock_run.assert_called_once_with(["/jdk/bin/java", "-version"])

    @patch("subprocess.run", side_effect=OSError("No such file or directory"))
    def test_cannot_start(self, mock_run, project_dir):
        plan = LaunchPlan(code=MagicMock(), context=RunContext(), command=["/missing/java"])

        with pytest.raises(LaunchError, match="Could not start /missing/java"):
            Launcher(project_path=project_dir).run(plan)
