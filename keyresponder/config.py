from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .errors import ConfigError


_INDENT_FIRST_ENVVAR = "KEYRESPONDER_INDENT_FIRST"
_INDENT_ENVVAR = "KEYRESPONDER_INDENT"
_MAX_REPROMPTS_ENVVAR = "KEYRESPONDER_MAX_REPROMPTS"
_WRAP_WIDTH_ENVVAR = "KEYRESPONDER_WRAP_WIDTH"

_CONFIG_ENVVAR = "KEYRESPONDER_CONFIG"


_override_config_path: Optional[Path] = None


def _int_from_env(var_name: str, default: int) -> int:
    raw = os.getenv(var_name)
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def _optional_limit(value: int) -> Optional[int]:
    # 0 in a config file or the environment means "no limit"
    return value if value != 0 else None


@dataclass(frozen=True)
class PromptConfig:
    indent_first: int = 0
    indent: int = 0
    max_reprompts: Optional[int] = None


@dataclass(frozen=True)
class HelpConfig:
    wrap_width: int = 80


@dataclass(frozen=True)
class ResponderConfig:
    prompt: PromptConfig = PromptConfig()
    help: HelpConfig = HelpConfig()


def _default_config_path() -> Optional[Path]:
    p = os.getenv(_CONFIG_ENVVAR)
    if p:
        return Path(p)

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "keyresponder" / "config.toml"

    home = Path.home()
    return home / ".config" / "keyresponder" / "config.toml"


def _load_toml(path: Path) -> dict:
    import tomllib

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8", errors="replace"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        return {}
    return data


def _config_from_dict(base: ResponderConfig, data: dict) -> ResponderConfig:
    if not isinstance(data, dict):
        return base

    prompt = base.prompt
    prompt_data = data.get("prompt")
    if isinstance(prompt_data, dict):
        for k in ("indent_first", "indent"):
            if k in prompt_data:
                try:
                    prompt = replace(prompt, **{k: int(prompt_data.get(k))})
                except (TypeError, ValueError):
                    pass
        if "max_reprompts" in prompt_data:
            try:
                prompt = replace(prompt, max_reprompts=_optional_limit(int(prompt_data.get("max_reprompts"))))
            except (TypeError, ValueError):
                pass

    help_cfg = base.help
    help_data = data.get("help")
    if isinstance(help_data, dict):
        if "wrap_width" in help_data:
            try:
                help_cfg = replace(help_cfg, wrap_width=int(help_data.get("wrap_width")))
            except (TypeError, ValueError):
                pass

    return replace(base, prompt=prompt, help=help_cfg)


def _apply_env_overrides(cfg: ResponderConfig) -> ResponderConfig:
    prompt = cfg.prompt
    help_cfg = cfg.help

    if os.getenv(_INDENT_FIRST_ENVVAR) is not None:
        prompt = replace(prompt, indent_first=_int_from_env(_INDENT_FIRST_ENVVAR, prompt.indent_first))
    if os.getenv(_INDENT_ENVVAR) is not None:
        prompt = replace(prompt, indent=_int_from_env(_INDENT_ENVVAR, prompt.indent))

    if os.getenv(_MAX_REPROMPTS_ENVVAR) is not None:
        current = prompt.max_reprompts if prompt.max_reprompts is not None else 0
        prompt = replace(prompt, max_reprompts=_optional_limit(_int_from_env(_MAX_REPROMPTS_ENVVAR, current)))

    if os.getenv(_WRAP_WIDTH_ENVVAR) is not None:
        help_cfg = replace(help_cfg, wrap_width=_int_from_env(_WRAP_WIDTH_ENVVAR, help_cfg.wrap_width))

    return replace(cfg, prompt=prompt, help=help_cfg)


def load_config(*, config_path: Optional[str | Path] = None) -> ResponderConfig:
    cfg = ResponderConfig()

    path = Path(config_path) if config_path is not None else _default_config_path()
    if path is not None and path.exists() and path.is_file():
        cfg = _config_from_dict(cfg, _load_toml(path))

    cfg = _apply_env_overrides(cfg)
    return cfg


def configure(*, config_path: Optional[str | Path] = None) -> ResponderConfig:
    global _override_config_path

    _override_config_path = Path(config_path) if config_path is not None else None

    get_config.cache_clear()
    return get_config()


@lru_cache(maxsize=1)
def get_config() -> ResponderConfig:
    return load_config(config_path=_override_config_path)
