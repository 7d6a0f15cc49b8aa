"""Tests for configuration management functionality."""

from pathlib import Path

import pytest

from objfile_debuginfo.infrastructure.config import DEFAULT_SETTINGS, Config, get_settings


@pytest.mark.unit
def test_config_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without environment or .env file everything is at its default."""
    monkeypatch.chdir(tmp_path)
    config = Config.from_env()

    assert config.object_file_path is None
    assert config.verbose is False
    assert config.log_dir is None
    assert config.strict_debug_stream is False


@pytest.mark.unit
def test_config_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test configuration loading from environment variables (mocked)."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OBJECT_FILE_PATH", "build/foo.o")
    monkeypatch.setenv("LOG_DIR", "logs")
    monkeypatch.setenv("VERBOSE", "yes")
    monkeypatch.setenv("OBJFILE_STRICT_DEBUG_STREAM", "1")

    config = Config.from_env()

    assert config.object_file_path == Path("build/foo.o")
    assert config.log_dir == Path("logs")
    assert config.verbose is True
    assert config.strict_debug_stream is True


@pytest.mark.unit
def test_config_env_file_loading(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Values in a .env file are picked up."""
    monkeypatch.chdir(tmp_path)
    env_file = tmp_path / ".env"
    env_file.write_text("OBJECT_FILE_PATH=from_dotenv.o\nVERBOSE=true\n", encoding="utf-8")

    config = Config.from_env(env_file)

    assert config.object_file_path == Path("from_dotenv.o")
    assert config.verbose is True


@pytest.mark.unit
def test_config_from_args_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Explicit arguments win over the environment; None keeps the env value."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OBJECT_FILE_PATH", "env.o")
    monkeypatch.setenv("OBJFILE_STRICT_DEBUG_STREAM", "true")

    config = Config.from_args(object_file_path=Path("arg.o"), verbose=True)

    assert config.object_file_path == Path("arg.o")
    assert config.verbose is True
    assert config.strict_debug_stream is True


@pytest.mark.unit
def test_config_validation(tmp_path: Path) -> None:
    """Missing, nonexistent and non-file paths are rejected."""
    with pytest.raises(ValueError, match="No object file"):
        Config().validate()
    with pytest.raises(ValueError, match="not found"):
        Config(object_file_path=tmp_path / "missing.o").validate()
    with pytest.raises(ValueError, match="Not a file"):
        Config(object_file_path=tmp_path).validate()

    obj = tmp_path / "foo.o"
    obj.write_bytes(b"\x7fELF")
    Config(object_file_path=obj).validate()


@pytest.mark.unit
def test_settings_defaults() -> None:
    assert get_settings() == DEFAULT_SETTINGS
    assert get_settings() is not DEFAULT_SETTINGS


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [("true", True), ("ON", True), ("1", True), ("false", False), ("0", False), ("nope", False)],
)
def test_settings_boolean_override(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
) -> None:
    monkeypatch.setenv("OBJFILE_INCLUDE_PARAMETERS", value)
    assert get_settings()["INCLUDE_PARAMETERS"] is expected
