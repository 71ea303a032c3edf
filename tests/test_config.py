from __future__ import annotations

import pytest

from keyresponder import ConfigError, configure, get_config
from keyresponder.config import HelpConfig, PromptConfig, ResponderConfig, load_config


def test_defaults():
    assert get_config() == ResponderConfig()
    assert get_config().prompt == PromptConfig(indent_first=0, indent=0, max_reprompts=None)
    assert get_config().help == HelpConfig(wrap_width=80)


def test_config_is_cached(tmp_path):
    cfg = tmp_path / "config.toml"
    cfg.write_text("[prompt]\nindent = 2\n")
    configure(config_path=cfg)
    first = get_config()
    cfg.write_text("[prompt]\nindent = 9\n")
    assert get_config() is first
    assert configure(config_path=cfg).prompt.indent == 9


def test_load_from_toml(tmp_path):
    cfg = tmp_path / "config.toml"
    cfg.write_text(
        "[prompt]\n"
        "indent_first = 1\n"
        "indent = 3\n"
        "max_reprompts = 4\n"
        "\n"
        "[help]\n"
        "wrap_width = 60\n"
    )
    loaded = load_config(config_path=cfg)
    assert loaded.prompt == PromptConfig(indent_first=1, indent=3, max_reprompts=4)
    assert loaded.help.wrap_width == 60


def test_zero_max_reprompts_means_unlimited(tmp_path):
    cfg = tmp_path / "config.toml"
    cfg.write_text("[prompt]\nmax_reprompts = 0\n")
    assert load_config(config_path=cfg).prompt.max_reprompts is None


def test_malformed_values_keep_defaults(tmp_path):
    cfg = tmp_path / "config.toml"
    cfg.write_text('[prompt]\nindent = "wide"\nmax_reprompts = "lots"\n[help]\nwrap_width = "narrow"\n')
    assert load_config(config_path=cfg) == ResponderConfig()


def test_env_overrides_file(tmp_path, monkeypatch):
    cfg = tmp_path / "config.toml"
    cfg.write_text("[prompt]\nindent = 2\nmax_reprompts = 4\n")
    monkeypatch.setenv("KEYRESPONDER_INDENT", "6")
    monkeypatch.setenv("KEYRESPONDER_INDENT_FIRST", "1")
    monkeypatch.setenv("KEYRESPONDER_MAX_REPROMPTS", "0")
    monkeypatch.setenv("KEYRESPONDER_WRAP_WIDTH", "100")
    loaded = configure(config_path=cfg)
    assert loaded.prompt == PromptConfig(indent_first=1, indent=6, max_reprompts=None)
    assert loaded.help.wrap_width == 100


def test_malformed_env_keeps_value(tmp_path, monkeypatch):
    cfg = tmp_path / "config.toml"
    cfg.write_text("[prompt]\nindent = 2\n")
    monkeypatch.setenv("KEYRESPONDER_INDENT", "abc")
    assert configure(config_path=cfg).prompt.indent == 2


def test_config_path_from_env(tmp_path, monkeypatch):
    cfg = tmp_path / "custom.toml"
    cfg.write_text("[prompt]\nindent_first = 5\n")
    monkeypatch.setenv("KEYRESPONDER_CONFIG", str(cfg))
    assert configure().prompt.indent_first == 5


def test_config_path_from_xdg(tmp_path, monkeypatch):
    cfg_dir = tmp_path / "keyresponder"
    cfg_dir.mkdir()
    (cfg_dir / "config.toml").write_text("[help]\nwrap_width = 72\n")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert configure().help.wrap_width == 72


def test_unparsable_file_raises_config_error(tmp_path):
    cfg = tmp_path / "config.toml"
    cfg.write_text("[prompt\nindent = 2\n")
    with pytest.raises(ConfigError, match="config.toml"):
        load_config(config_path=cfg)
