"""Tests for configuration loading."""

from pathlib import Path

import pytest

from lastfm_archiver.core.config import (
    MAX_PAGE_SIZE,
    Config,
    LastFMConfig,
    LoggingConfig,
    create_default_config,
    get_config_path,
    load_config,
    write_default_config,
)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path):
    config = load_config(tmp_path / "missing.toml")

    assert config == Config()
    assert config.lastfm.page_size == MAX_PAGE_SIZE
    assert config.database.path is None


def test_load_sections(tmp_path):
    path = _write(
        tmp_path / "config.toml",
        """
[lastfm]
api_key = "abc"
user = "someone"
page_size = 50
timeout = 10.0

[database]
path = "~/plays.db"

[logging]
level = "debug"
console_output = true
""",
    )

    config = load_config(path)

    assert config.lastfm.api_key == "abc"
    assert config.lastfm.user == "someone"
    assert config.lastfm.page_size == 50
    assert config.lastfm.timeout == 10.0
    assert config.database.path == str(Path("~/plays.db").expanduser())
    assert config.logging.level == "DEBUG"
    assert config.logging.console_output is True


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = _write(
        tmp_path / "config.toml",
        '[lastfm]\napi_key = "from-file"\nuser = "file-user"\n',
    )
    monkeypatch.setenv("LASTFM_API_KEY", "from-env")
    monkeypatch.setenv("LASTFM_ARCHIVER_DATABASE", str(tmp_path / "env.db"))

    config = load_config(path)

    assert config.lastfm.api_key == "from-env"
    assert config.lastfm.user == "file-user"
    assert config.database.path == str(tmp_path / "env.db")


def test_dotenv_in_config_dir(isolated_dirs, monkeypatch):
    # Register the variable so load_dotenv's write is undone after the test
    monkeypatch.setenv("LASTFM_USER", "placeholder")
    monkeypatch.delenv("LASTFM_USER")
    _write(
        isolated_dirs / "config" / "lastfm-archiver" / ".env",
        "LASTFM_USER=dotenv-user\n",
    )

    config = load_config()

    assert config.lastfm.user == "dotenv-user"


def test_invalid_page_size_falls_back(tmp_path):
    path = _write(
        tmp_path / "config.toml",
        '[lastfm]\nuser = "someone"\npage_size = 500\n',
    )

    config = load_config(path)

    assert config.lastfm.page_size == MAX_PAGE_SIZE
    assert config.lastfm.user == "someone"


@pytest.mark.parametrize(
    "lastfm_section",
    [
        'page_size = "abc"',
        'timeout = "x"',
        "page_size = true",
        "page_size = 12.5",
    ],
)
def test_wrongly_typed_lastfm_values_fall_back(tmp_path, lastfm_section):
    path = _write(
        tmp_path / "config.toml",
        f'[lastfm]\nuser = "someone"\n{lastfm_section}\n',
    )

    config = load_config(path)

    assert config.lastfm.page_size == MAX_PAGE_SIZE
    assert config.lastfm.timeout == 30.0
    assert config.lastfm.user == "someone"


@pytest.mark.parametrize("level", ['"verbose"', "5", "true"])
def test_invalid_log_level_falls_back_to_info(tmp_path, level):
    path = _write(
        tmp_path / "config.toml",
        f"[logging]\nlevel = {level}\nconsole_output = true\n",
    )

    config = load_config(path)

    assert config.logging.level == "INFO"
    assert config.logging.console_output is True


def test_log_level_is_normalized(tmp_path):
    path = _write(tmp_path / "config.toml", '[logging]\nlevel = "warning"\n')

    assert load_config(path).logging.level == "WARNING"


def test_wrongly_typed_paths_use_defaults(tmp_path):
    path = _write(
        tmp_path / "config.toml",
        "[database]\npath = 42\n\n[logging]\nlog_file = 7\n",
    )

    config = load_config(path)

    assert config.database.path is None
    assert config.logging.log_file is None


def test_non_table_section_is_ignored(tmp_path):
    path = _write(tmp_path / "config.toml", 'lastfm = "oops"\n')

    assert load_config(path) == Config()


@pytest.mark.parametrize("level", ["verbose", 5, None])
def test_logging_validate_rejects(level):
    with pytest.raises(ValueError):
        LoggingConfig(level=level).validate()


def test_unparseable_file_falls_back_to_defaults(tmp_path):
    path = _write(tmp_path / "config.toml", "[lastfm\nnot toml")

    assert load_config(path) == Config()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"page_size": 0},
        {"page_size": MAX_PAGE_SIZE + 1},
        {"page_size": "10"},
        {"timeout": 0},
        {"timeout": "30"},
    ],
)
def test_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        LastFMConfig(**kwargs).validate()


def test_config_path_prefers_working_directory(isolated_dirs):
    assert get_config_path() == isolated_dirs / "config" / "lastfm-archiver" / "config.toml"

    _write(isolated_dirs / "config.toml", "")
    assert get_config_path() == isolated_dirs / "config.toml"


def test_write_default_config_round_trips(isolated_dirs):
    path = write_default_config()

    assert path == isolated_dirs / "config" / "lastfm-archiver" / "config.toml"
    assert path.read_text(encoding="utf-8").strip() == create_default_config()
    assert load_config(path) == Config()


def test_write_default_config_keeps_existing(tmp_path):
    path = _write(tmp_path / "config.toml", '[lastfm]\nuser = "mine"\n')

    write_default_config(path)

    assert load_config(path).lastfm.user == "mine"
