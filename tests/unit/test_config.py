"""Unit tests for configuration system."""

from pathlib import Path

import pytest

from jlaunch.config import LaunchConfig, find_config_file, load_config
from jlaunch.config.parser import JAVA_OPTIONS_ENV
from jlaunch.dependencies import DEFAULT_LOCAL_REPOSITORY
from jlaunch.locations import DEFAULT_CACHE_DIR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own JLAUNCH_JAVA_OPTIONS out of these tests."""
    monkeypatch.delenv(JAVA_OPTIONS_ENV, raising=False)


class TestConfigParsing:
    """Test TOML configuration parsing."""

    def test_find_config_file_exists(self, tmp_path):
        config_file = tmp_path / "jlaunch.toml"
        config_file.write_text("[run]\n")

        assert find_config_file(tmp_path) == config_file

    def test_find_hidden_config_file(self, tmp_path):
        config_file = tmp_path / ".jlaunch.toml"
        config_file.write_text("[run]\n")

        assert find_config_file(tmp_path) == config_file

    def test_visible_config_file_wins(self, tmp_path):
        (tmp_path / ".jlaunch.toml").write_text("[run]\n")
        (tmp_path / "jlaunch.toml").write_text("[run]\n")

        assert find_config_file(tmp_path) == tmp_path / "jlaunch.toml"

    def test_find_config_file_missing(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_load_config_defaults(self, tmp_path):
        config = load_config(tmp_path)

        assert config.run.java_options == ""
        assert config.run.jshell_options == ""
        assert config.run.java_version is None
        assert config.run.enable_cds is False
        assert config.cache.dir == DEFAULT_CACHE_DIR
        assert config.cache.jars_dir == DEFAULT_CACHE_DIR / "jars"
        assert config.dependencies.local_repository == DEFAULT_LOCAL_REPOSITORY
        assert config.jdk.java_home is None
        assert config.project_root == tmp_path

    def test_load_config_full(self, tmp_path):
        (tmp_path / "jlaunch.toml").write_text(
            """
[run]
java_options = "-Xmx1g '-Dapp.name=my app'"
jshell_options = "--feedback concise"
java_version = "21+"
enable_cds = true

[cache]
dir = "/var/cache/jlaunch"

[dependencies]
local_repository = "/opt/m2"

[jdk]
java_home = "/opt/jdk-21"
"""
        )

        config = load_config(tmp_path)

        assert config.run.java_options == "-Xmx1g '-Dapp.name=my app'"
        assert config.run.java_version == "21+"
        assert config.run.enable_cds is True
        assert config.cache.dir == Path("/var/cache/jlaunch")
        assert config.dependencies.local_repository == Path("/opt/m2")
        assert config.jdk.java_home == "/opt/jdk-21"

    def test_partial_sections_keep_defaults(self, tmp_path):
        (tmp_path / "jlaunch.toml").write_text('[run]\njava_version = "17"\n')

        config = load_config(tmp_path)

        assert config.run.java_version == "17"
        assert config.run.java_options == ""
        assert config.cache.dir == DEFAULT_CACHE_DIR

    def test_invalid_toml_uses_defaults(self, tmp_path, caplog):
        (tmp_path / "jlaunch.toml").write_text("[run\njava_options = ")

        config = load_config(tmp_path)

        assert config.run.java_options == ""
        assert "Ignoring invalid config file" in caplog.text


class TestPathResolution:
    def test_project_root_expansion(self, tmp_path):
        (tmp_path / "jlaunch.toml").write_text(
            """
[cache]
dir = "${PROJECT_ROOT}/.cache"

[dependencies]
local_repository = "${PROJECT_ROOT}/repo"
"""
        )

        config = load_config(tmp_path)

        assert config.cache.dir == tmp_path / ".cache"
        assert config.cache.jars_dir == tmp_path / ".cache" / "jars"
        assert config.dependencies.local_repository == tmp_path / "repo"

    def test_home_expansion(self, tmp_path):
        config = LaunchConfig(project_root=tmp_path)

        assert config.resolve_path("~/jdks") == Path.home() / "jdks"


class TestOptions:
    def test_java_options_split(self, tmp_path):
        (tmp_path / "jlaunch.toml").write_text(
            "[run]\njava_options = '-Xmx1g \"-Dgreeting=hello world\"'\n"
        )

        config = load_config(tmp_path)

        assert config.java_options() == ["-Xmx1g", "-Dgreeting=hello world"]

    def test_jshell_options_split(self):
        config = LaunchConfig()
        config.run.jshell_options = "--feedback concise"

        assert config.jshell_options() == ["--feedback", "concise"]

    def test_empty_options(self):
        assert LaunchConfig().java_options() == []


class TestEnvironment:
    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "jlaunch.toml").write_text("[run]\njava_options = '-Xmx1g'\n")
        monkeypatch.setenv(JAVA_OPTIONS_ENV, "-Xmx2g -Dfrom=env")

        config = load_config(tmp_path)

        assert config.java_options() == ["-Xmx2g", "-Dfrom=env"]

    def test_empty_env_clears_options(self, tmp_path, monkeypatch):
        (tmp_path / "jlaunch.toml").write_text("[run]\njava_options = '-Xmx1g'\n")
        monkeypatch.setenv(JAVA_OPTIONS_ENV, "")

        assert load_config(tmp_path).java_options() == []

    def test_dotenv_file(self, tmp_path, monkeypatch):
        # Registers the variable with monkeypatch so the value written by
        # load_dotenv is removed again afterwards.
        monkeypatch.setenv(JAVA_OPTIONS_ENV, "unused")
        monkeypatch.delenv(JAVA_OPTIONS_ENV)
        (tmp_path / ".env").write_text(f"{JAVA_OPTIONS_ENV}=-Xss4m\n")

        config = load_config(tmp_path)

        assert config.java_options() == ["-Xss4m"]

    def test_dotenv_does_not_override_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(JAVA_OPTIONS_ENV, "-Xmx3g")
        (tmp_path / ".env").write_text(f"{JAVA_OPTIONS_ENV}=-Xss4m\n")

        assert load_config(tmp_path).java_options() == ["-Xmx3g"]
