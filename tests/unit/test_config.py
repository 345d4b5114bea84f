"""Tests for configuration loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from toolwire.config.loader import _deep_merge, load_config
from toolwire.config.schema import (
    APIConfig,
    FetchConfig,
    FilesConfig,
    LoggingConfig,
    RouterConfig,
    ToolsConfig,
    ToolwireConfig,
)
from toolwire.core.errors import ConfigError

# ─── Schema Defaults ──────────────────────────────────────────


class TestSchemaDefaults:
    def test_toolwire_config_all_defaults(self):
        cfg = ToolwireConfig()
        assert cfg.tools.invoke_timeout == 30.0
        assert cfg.tools.files.allowed_dir == ""
        assert cfg.tools.fetch.enabled is True
        assert cfg.router.variant == "assistant"
        assert cfg.api.port == 8080
        assert cfg.logging.level == "INFO"

    def test_files_config_defaults(self):
        cfg = FilesConfig()
        assert cfg.max_read_bytes == 1024 * 1024

    def test_fetch_config_defaults(self):
        cfg = FetchConfig()
        assert cfg.timeout == 10.0
        assert cfg.max_chars == 1000
        assert cfg.user_agent.startswith("toolwire/")

    def test_router_config_defaults(self):
        cfg = RouterConfig()
        assert cfg.default_directory == "./"

    def test_api_config_defaults(self):
        cfg = APIConfig()
        assert cfg.host == "127.0.0.1"
        assert cfg.cors_origins == ["*"]

    def test_logging_config_defaults(self):
        cfg = LoggingConfig()
        assert cfg.file == ""
        assert "%(message)s" in cfg.format


class TestSchemaValidation:
    def test_from_dict(self):
        cfg = ToolwireConfig.model_validate(
            {
                "tools": {"invoke_timeout": None, "fetch": {"max_chars": 50}},
                "router": {"variant": "literal"},
            }
        )
        assert cfg.tools.invoke_timeout is None
        assert cfg.tools.fetch.max_chars == 50
        assert cfg.router.variant == "literal"

    def test_unknown_variant_raises(self):
        with pytest.raises(ValidationError):
            RouterConfig(variant="psychic")  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_limits_raise(self, value):
        with pytest.raises(ValidationError):
            FetchConfig(max_chars=value)
        with pytest.raises(ValidationError):
            FilesConfig(max_read_bytes=value)

    def test_extra_fields_ignored_by_default(self):
        cfg = ToolsConfig.model_validate({"unknown_field": "value"})
        assert not hasattr(cfg, "unknown_field")


# ─── Deep Merge ───────────────────────────────────────────────


class TestDeepMerge:
    def test_flat_merge(self):
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self):
        base = {"tools": {"files": {"allowed_dir": "/a"}, "invoke_timeout": 5}}
        override = {"tools": {"files": {"max_read_bytes": 10}}}
        assert _deep_merge(base, override) == {
            "tools": {"files": {"allowed_dir": "/a", "max_read_bytes": 10}, "invoke_timeout": 5},
        }

    def test_override_replaces_non_dict(self):
        assert _deep_merge({"a": {"x": 1}}, {"a": 2}) == {"a": 2}

    def test_base_unchanged(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"y": 2}})
        assert base == {"a": {"x": 1}}


# ─── load_config ──────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_when_no_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = load_config()
        assert cfg == ToolwireConfig()

    def test_load_from_explicit_path(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[router]\nvariant = "literal"\n')
        cfg = load_config(path=toml_file)
        assert cfg.router.variant == "literal"

    def test_nested_tables(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text(
            '[tools.files]\nallowed_dir = "/srv"\n\n[tools.fetch]\nenabled = false\n'
        )
        cfg = load_config(path=toml_file)
        assert cfg.tools.files.allowed_dir == "/srv"
        assert cfg.tools.fetch.enabled is False

    def test_explicit_path_not_found_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(path=tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[router\nvariant = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path=bad)

    def test_validation_failure_raises_config_error(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[api]\nport = "eighty"\n')
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(path=toml_file)

    def test_overrides_applied(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = load_config(overrides={"api": {"port": 9999}})
        assert cfg.api.port == 9999

    def test_overrides_beat_file(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text("[api]\nport = 1111\n")
        cfg = load_config(path=toml_file, overrides={"api": {"port": 2222}})
        assert cfg.api.port == 2222


class TestPathAnchoring:
    def test_relative_allowed_dir_uses_file_directory(self, tmp_path, monkeypatch):
        conf_dir = tmp_path / "conf"
        conf_dir.mkdir()
        toml_file = conf_dir / "toolwire.toml"
        toml_file.write_text('[tools.files]\nallowed_dir = "workspace"\n')
        monkeypatch.chdir(tmp_path)
        cfg = load_config(path=toml_file)
        assert cfg.tools.files.allowed_dir == str(conf_dir.resolve() / "workspace")

    def test_relative_log_file_uses_file_directory(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[logging]\nfile = "logs/toolwire.log"\n')
        cfg = load_config(path=toml_file)
        assert cfg.logging.file == str(tmp_path.resolve() / "logs" / "toolwire.log")

    def test_absolute_and_home_paths_untouched(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[tools.files]\nallowed_dir = "~/data"\n\n[logging]\nfile = "/var/log/t.log"\n')
        cfg = load_config(path=toml_file)
        assert cfg.tools.files.allowed_dir == "~/data"
        assert cfg.logging.file == "/var/log/t.log"

    def test_empty_allowed_dir_stays_unset(self, tmp_path):
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[tools.files]\nallowed_dir = ""\n')
        assert load_config(path=toml_file).tools.files.allowed_dir == ""

    def test_overrides_not_anchored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = load_config(overrides={"tools": {"files": {"allowed_dir": "rel"}}})
        assert cfg.tools.files.allowed_dir == "rel"

    def test_project_file_anchors_from_any_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "toolwire.toml").write_text('[tools.files]\nallowed_dir = "."\n')
        monkeypatch.chdir(tmp_path)
        assert load_config().tools.files.allowed_dir == str(tmp_path.resolve() / ".")


class TestEnvVarOverrides:
    def test_toolwire_config_env_path(self, tmp_path, monkeypatch):
        toml_file = tmp_path / "env.toml"
        toml_file.write_text("[tools]\ninvoke_timeout = 3.5\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TOOLWIRE_CONFIG", str(toml_file))
        cfg = load_config()
        assert cfg.tools.invoke_timeout == 3.5

    def test_toolwire_config_env_missing_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TOOLWIRE_CONFIG", str(tmp_path / "nope.toml"))
        with pytest.raises(ConfigError, match="non-existent"):
            load_config()


class TestFileDiscovery:
    def test_project_local_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "toolwire.toml").write_text("[api]\nport = 7000\n")
        assert load_config().api.port == 7000

    def test_user_config(self, tmp_path, monkeypatch):
        xdg = tmp_path / "xdg"
        (xdg / "toolwire").mkdir(parents=True)
        (xdg / "toolwire" / "config.toml").write_text("[api]\nport = 6000\n")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
        monkeypatch.chdir(tmp_path)
        assert load_config().api.port == 6000

    def test_project_beats_user(self, tmp_path, monkeypatch):
        xdg = tmp_path / "xdg"
        (xdg / "toolwire").mkdir(parents=True)
        (xdg / "toolwire" / "config.toml").write_text(
            '[api]\nport = 6000\nhost = "0.0.0.0"\n'
        )
        (tmp_path / "toolwire.toml").write_text("[api]\nport = 7000\n")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
        monkeypatch.chdir(tmp_path)
        cfg = load_config()
        assert cfg.api.port == 7000
        assert cfg.api.host == "0.0.0.0"

    def test_env_beats_project(self, tmp_path, monkeypatch):
        (tmp_path / "toolwire.toml").write_text("[api]\nport = 7000\n")
        env_file = tmp_path / "env.toml"
        env_file.write_text("[api]\nport = 8000\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TOOLWIRE_CONFIG", str(env_file))
        assert load_config().api.port == 8000
