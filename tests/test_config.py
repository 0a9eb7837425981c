import pytest

from finantech.config import AIConfig, load_app_config


def write_config(tmp_path, content: str):
    path = tmp_path / "finantech_config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_full_config(tmp_path):
    path = write_config(
        tmp_path,
        """
[company]
default = "ACME Ltda"

[database]
engine = "sqlite"
path = "data/finantech.sqlite"

[ai]
model = "gemini-test"
api_key_env = "FINANTECH_TEST_KEY"
timeout = 5

[display]
grouping = "costCenter"
decimals = 1

[logging]
level = "debug"
file = "logs/app.log"
""",
    )

    cfg = load_app_config(str(path))

    assert cfg.default_company == "ACME Ltda"
    assert cfg.database.engine == "sqlite"
    assert cfg.database.path == (tmp_path / "data" / "finantech.sqlite").resolve()
    assert cfg.ai.model == "gemini-test"
    assert cfg.ai.api_key_env == "FINANTECH_TEST_KEY"
    assert cfg.ai.timeout == 5.0
    assert cfg.grouping == "costCenter"
    assert cfg.decimals == 1
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == (tmp_path / "logs" / "app.log").resolve()


def test_defaults_when_sections_are_missing(tmp_path):
    path = write_config(tmp_path, "")

    cfg = load_app_config(str(path))

    assert cfg.default_company is None
    assert cfg.database.path.name == "finantech.sqlite"
    assert cfg.ai == AIConfig()
    assert cfg.grouping == "none"
    assert cfg.decimals == 2
    assert cfg.log_level == "INFO"
    assert cfg.log_file is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "nope.toml"))


def test_malformed_toml_raises(tmp_path):
    path = write_config(tmp_path, "[company\ndefault = ")

    with pytest.raises(ValueError):
        load_app_config(str(path))


def test_invalid_grouping_raises(tmp_path):
    path = write_config(tmp_path, '[display]\ngrouping = "category"\n')

    with pytest.raises(ValueError, match="display.grouping"):
        load_app_config(str(path))


def test_api_key_is_read_from_environment(monkeypatch):
    ai = AIConfig(api_key_env="FINANTECH_TEST_KEY")

    monkeypatch.delenv("FINANTECH_TEST_KEY", raising=False)
    assert ai.api_key is None

    monkeypatch.setenv("FINANTECH_TEST_KEY", "secret")
    assert ai.api_key == "secret"
