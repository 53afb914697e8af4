"""Tests for config.py — env loading, typed env parsing and constants."""

from todoist_cli import config


class TestLoadEnv:
    def test_basic_key_value(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("FOO=bar\nBAZ=qux\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"FOO": "bar", "BAZ": "qux"}

    def test_strips_whitespace(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("  KEY  =  value  \n")
        assert config.load_env(str(env_file)) == {"KEY": "value"}

    def test_skips_comments_and_blank_lines(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nA=1\n\n\nB=2\n")
        assert config.load_env(str(env_file)) == {"A": "1", "B": "2"}

    def test_value_with_equals_sign(self, tmp_path):
        """Values can contain = signs (split on first only)."""
        env_file = tmp_path / ".env"
        env_file.write_text("TODOIST_API_TOKEN=abc=def\n")
        assert config.load_env(str(env_file)) == {"TODOIST_API_TOKEN": "abc=def"}

    def test_missing_file_returns_empty(self, tmp_path):
        assert config.load_env(str(tmp_path / "nonexistent")) == {}


class TestEnvParsing:
    def test_process_environment_wins(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"TODOIST_X": "from-file"})
        monkeypatch.setenv("TODOIST_X", "from-env")
        assert config._lookup("TODOIST_X") == "from-env"

    def test_env_file_fallback(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"TODOIST_X": "from-file"})
        monkeypatch.delenv("TODOIST_X", raising=False)
        assert config._lookup("TODOIST_X") == "from-file"

    def test_bool(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"TODOIST_TEST_A": "yes", "TODOIST_TEST_B": "off"})
        assert config._env_bool("TODOIST_TEST_A") is True
        assert config._env_bool("TODOIST_TEST_B") is False
        assert config._env_bool("MISSING_TODOIST_FLAG", True) is True

    def test_int_and_float_fallback(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"TODOIST_TEST_N": "abc", "TODOIST_TEST_F": "0.25"})
        assert config._env_int("TODOIST_TEST_N", 30) == 30
        assert config._env_float("TODOIST_TEST_F", 1.0) == 0.25


class TestConstants:
    def test_defaults(self):
        assert config.VERSION == "0.2.0"
        assert config.PROG == "todoist-cli"
        assert config.MAX_AMBIGUOUS_CANDIDATES == 5
        assert config.RESOLVE_SEARCH_LIMIT == 10
        assert config.SEARCH_LIMIT == 20
        assert config.VALID_PRIORITIES == {1, 2, 3, 4}
        assert config.LEASE_COMMAND[:3] == ["secrets", "lease", "todoist_api_token"]
