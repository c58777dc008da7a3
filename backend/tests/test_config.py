"""Tests for configuration loading and precedence."""

import json

import pytest

from household_budget.config import ConfigError, load_config
from household_budget.run import build_overrides, parse_args


@pytest.fixture(autouse=True)
def in_tmp_dir(tmp_path, monkeypatch):
    """Run from an empty directory so no stray config.toml is picked up."""
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self) -> None:
        config = load_config()
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.database.url == "sqlite:///data/budget.db"
        assert config.database.max_connections == 5
        assert config.cors.allowed_origins == []
        assert config.logging.level == "INFO"
        assert config.logging.json_logs is True

    def test_explicit_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.toml", explicit=True)

    def test_implicit_missing_file(self, tmp_path) -> None:
        config = load_config(tmp_path / "missing.toml")
        assert config.server.port == 3000


class TestFiles:
    def test_toml(self, tmp_path) -> None:
        path = tmp_path / "budget.toml"
        path.write_text(
            '[server]\nport = 8080\n\n'
            '[database]\nurl = "sqlite:///budget-test.db"\n\n'
            '[cors]\nallowed_origins = ["http://localhost:5173"]\n\n'
            '[logging]\nlevel = "debug"\njson = false\n'
        )
        config = load_config(path, explicit=True)
        assert config.server.port == 8080
        assert config.server.host == "0.0.0.0"
        assert config.database.url == "sqlite:///budget-test.db"
        assert config.cors.allowed_origins == ["http://localhost:5173"]
        assert config.logging.level == "DEBUG"
        assert config.logging.json_logs is False

    def test_default_path_is_read(self, tmp_path) -> None:
        (tmp_path / "config.toml").write_text("[server]\nport = 9000\n")
        assert load_config().server.port == 9000

    def test_flat_json(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "server_port": 8081,
            "database_max_connections": 2,
            "logging_json": False,
            "unknown_key": "ignored",
        }))
        config = load_config(path, explicit=True)
        assert config.server.port == 8081
        assert config.database.max_connections == 2
        assert config.logging.json_logs is False

    def test_invalid_toml(self, tmp_path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[server\nport = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path, explicit=True)

    def test_invalid_value(self, tmp_path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[server]\nport = 70000\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path, explicit=True)


class TestPrecedence:
    def test_env_overrides_file(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[server]\nport = 8080\nhost = "127.0.0.1"\n')
        monkeypatch.setenv("APP__SERVER__PORT", "9090")

        config = load_config(path)
        assert config.server.port == 9090
        assert config.server.host == "127.0.0.1"

    def test_env_database_url(self, monkeypatch) -> None:
        monkeypatch.setenv("APP__DATABASE__URL", "sqlite:///env.db")
        assert load_config().database.url == "sqlite:///env.db"

    def test_cli_overrides_env_and_file(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[server]\nport = 8080\n[logging]\nlevel = \"WARNING\"\n")
        monkeypatch.setenv("APP__SERVER__PORT", "9090")

        args = parse_args(["--config", str(path), "--port", "7070", "--log-level", "error"])
        config = load_config(args.config, explicit=True, overrides=build_overrides(args))
        assert config.server.port == 7070
        assert config.logging.level == "ERROR"

    def test_unset_flags_do_not_override(self) -> None:
        args = parse_args(["--database-url", "sqlite:///cli.db"])
        assert build_overrides(args) == {"database": {"url": "sqlite:///cli.db"}}
