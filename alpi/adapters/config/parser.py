"""
Provisioning configuration parser

Turns the merged TOML/env/CLI mapping into the immutable ProvisionConfig.
"""
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from ...core import constants as c
from ...core.config import Packages, Paths, ProvisionConfig, Repositories
from ...core.exceptions import ConfigError

TOP_LEVEL_KEYS = {
    "paths", "repos", "packages", "palette",
    "jobs", "components", "dotfiles", "config_dirs",
}
PATH_KEYS = {
    "config_home", "cache_dir", "suckless_dir", "lookandfeel_dir",
    "niri_config_dir", "yay_dir", "local_bin", "xinitrc_hooks", "profile",
    "suckless_prefix", "system_root",
}
REPO_KEYS = {"suckless", "lookandfeel", "lookandfeel_branch", "niri_config", "yay", "lazyvim"}
PACKAGE_KEYS = {"core", "apps", "niri", "suckless_build_deps", "aur_apps", "aur_niri"}


def _check_keys(section: str, table: Mapping[str, Any], allowed: set) -> None:
    unknown = sorted(set(table) - allowed)
    if unknown:
        where = f"[{section}]" if section else "top level"
        raise ConfigError(f"Unknown configuration key(s) at {where}: {', '.join(unknown)}")


def _table(cfg: Mapping[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string")
    return value


def _string_list(value: Any, key: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"{key} must be a list of non-empty strings")
    return tuple(value)


def resolve_path(value: Any, key: str, home: Path) -> Path:
    """
    Resolve a configured path.

    ``~`` is expanded against ``home``; relative paths are relative to
    ``home``.
    """
    raw = _string(value, key)
    if raw == "~" or raw.startswith("~/"):
        return home / raw[2:]
    path = Path(raw)
    return path if path.is_absolute() else home / path


def parse_jobs(value: Any) -> Optional[int]:
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"jobs must be an integer, got {value!r}")
    if value < 1:
        raise ConfigError(f"jobs must be at least 1, got {value}")
    return value


def parse_paths(cfg: Mapping[str, Any], home: Path, env: Mapping[str, str]) -> Paths:
    table = _table(cfg, "paths")
    _check_keys("paths", table, PATH_KEYS)

    def get(key: str, default: Path) -> Path:
        if key in table:
            return resolve_path(table[key], f"paths.{key}", home)
        return default

    config_home = get("config_home", Path(env.get("XDG_CONFIG_HOME") or home / ".config"))
    cache_dir = get("cache_dir", home / c.CACHE_DIR)
    system_root = get("system_root", Path(c.SYSTEM_ROOT))
    suckless_prefix = _string(table.get("suckless_prefix", c.SUCKLESS_PREFIX), "paths.suckless_prefix")

    return Paths(
        home=home,
        config_home=config_home,
        cache_dir=cache_dir,
        suckless_dir=get("suckless_dir", config_home / c.SUCKLESS_DIR_NAME),
        lookandfeel_dir=get("lookandfeel_dir", cache_dir / c.LOOKANDFEEL_DIR_NAME),
        niri_config_dir=get("niri_config_dir", cache_dir / c.NIRI_CONFIG_DIR_NAME),
        yay_dir=get("yay_dir", cache_dir / c.YAY_DIR_NAME),
        local_bin=get("local_bin", home / c.LOCAL_BIN),
        xinitrc_hooks=get("xinitrc_hooks", config_home / c.XINITRC_HOOKS_DIR_NAME),
        profile=get("profile", home / c.PROFILE_FILE),
        suckless_prefix=suckless_prefix,
        system_root=system_root,
    )


def parse_repos(cfg: Mapping[str, Any]) -> Repositories:
    table = _table(cfg, "repos")
    _check_keys("repos", table, REPO_KEYS)

    values: Dict[str, Any] = {}
    for key, value in table.items():
        if key == "lookandfeel_branch":
            # empty string means "whatever the remote HEAD is"
            if value == "":
                values[key] = None
                continue
        values[key] = _string(value, f"repos.{key}")
    return Repositories(**values)


def parse_packages(cfg: Mapping[str, Any]) -> Packages:
    table = _table(cfg, "packages")
    _check_keys("packages", table, PACKAGE_KEYS)
    return Packages(**{key: _string_list(value, f"packages.{key}") for key, value in table.items()})


def parse_palette(cfg: Mapping[str, Any]) -> Dict[str, str]:
    table = _table(cfg, "palette")
    _check_keys("palette", table, set(c.PALETTE))
    palette = dict(c.PALETTE)
    for key, value in table.items():
        palette[key] = _string(value, f"palette.{key}")
    return palette


def build_config(
    raw: Mapping[str, Any],
    home: Path,
    env: Optional[Mapping[str, str]] = None,
) -> ProvisionConfig:
    """
    Build the immutable configuration from a merged raw mapping.

    Args:
        raw: Merged TOML / environment / CLI mapping
        home: The invoking user's home directory
        env: Environment used for ``XDG_CONFIG_HOME``

    Raises:
        ConfigError: On unknown keys or wrongly typed values
    """
    env = env or {}
    home = Path(home).expanduser()
    _check_keys("", raw, TOP_LEVEL_KEYS)

    lists: Dict[str, Tuple[str, ...]] = {}
    for key in ("components", "dotfiles", "config_dirs"):
        if key in raw:
            lists[key] = _string_list(raw[key], key)

    return ProvisionConfig(
        paths=parse_paths(raw, home, env),
        repos=parse_repos(raw),
        packages=parse_packages(raw),
        palette=parse_palette(raw),
        jobs=parse_jobs(raw.get("jobs")),
        **lists,
    )
