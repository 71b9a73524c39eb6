from pathlib import Path

import pytest

from alpi.adapters.cli.app import load_config
from alpi.adapters.config.loader import ConfigLoader
from alpi.adapters.config.parser import build_config
from alpi.core import constants as c
from alpi.core.config import palette_color
from alpi.core.exceptions import ConfigError


def test_defaults_need_no_file(home):
    cfg = build_config({}, home, {})
    assert cfg.jobs is None
    assert cfg.components == c.SUCKLESS_COMPONENTS


def test_default_layout(home):
    paths = build_config({}, home, {}).paths
    assert paths.config_home == home / ".config"
    assert paths.lookandfeel_dir == home / ".cache/alpi/lookandfeel"
    assert paths.yay_dir == home / ".cache/alpi/yay-bin"
    assert paths.suckless_dir == home / ".config/suckless"
    assert paths.profile == home / ".bash_profile"
    assert paths.etc == Path("/etc")


def test_xdg_config_home_respected(home, tmp_path):
    xdg = tmp_path / "xdg"
    paths = build_config({}, home, {"XDG_CONFIG_HOME": str(xdg)}).paths
    assert paths.config_home == xdg
    assert paths.xinitrc_hooks == xdg / "xinitrc.d"


def test_cache_dir_moves_mirrors(home):
    paths = build_config({"paths": {"cache_dir": "~/mirrors"}}, home, {}).paths
    assert paths.cache_dir == home / "mirrors"
    assert paths.niri_config_dir == home / "mirrors/niri-config"


def test_relative_paths_are_under_home(home):
    paths = build_config({"paths": {"local_bin": "bin"}}, home, {}).paths
    assert paths.local_bin == home / "bin"


def test_overrides(home):
    cfg = build_config(
        {
            "jobs": 3,
            "components": ["dwm", "st"],
            "repos": {"lookandfeel_branch": ""},
            "packages": {"aur_apps": ["pfetch"]},
            "palette": {"bg": "#000000"},
        },
        home,
        {},
    )
    assert cfg.jobs == 3
    assert cfg.components == ("dwm", "st")
    assert cfg.repos.lookandfeel_branch is None
    assert cfg.packages.aur_apps == ("pfetch",)
    assert cfg.packages.core == c.PACMAN_CORE
    assert palette_color(cfg, "bg") == "#000000"
    assert palette_color(cfg, "fg") == c.PALETTE["fg"]


@pytest.mark.parametrize("raw,message", [
    ({"bogus": 1}, "bogus"),
    ({"paths": {"nope": "x"}}, "nope"),
    ({"palette": {"pink": "#fff"}}, "pink"),
    ({"jobs": 0}, "at least 1"),
    ({"jobs": True}, "integer"),
    ({"jobs": "4"}, "integer"),
    ({"packages": {"core": "git"}}, "list"),
    ({"repos": "x"}, "table"),
])
def test_invalid_config_rejected(home, raw, message):
    with pytest.raises(ConfigError, match=message):
        build_config(raw, home, {})


def test_loader_env_overrides_toml(tmp_path):
    toml = tmp_path / "config.toml"
    toml.write_text('jobs = 2\n[repos]\nlookandfeel_branch = "main"\nsuckless = "https://a"\n')
    loader = ConfigLoader(env={"ALPI_JOBS": "8", "ALPI_LOOKANDFEEL_BRANCH": "dev"})

    raw = loader.load(toml_path=toml)

    assert raw["jobs"] == 8
    assert raw["repos"] == {"lookandfeel_branch": "dev", "suckless": "https://a"}


def test_command_line_jobs_beat_env_and_file(tmp_path, home):
    toml = tmp_path / "config.toml"
    toml.write_text("jobs = 2\n")
    cfg = load_config(toml, home, {"ALPI_JOBS": "8"}, {"jobs": 1})
    assert cfg.jobs == 1


def test_load_config_without_overrides_keeps_env(tmp_path, home):
    toml = tmp_path / "config.toml"
    toml.write_text("jobs = 2\n")
    assert load_config(toml, home, {"ALPI_JOBS": "8"}).jobs == 8


def test_loader_missing_optional_file_is_skipped(tmp_path):
    assert ConfigLoader(env={}).load(toml_path=tmp_path / "absent.toml") == {}


def test_loader_missing_required_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader(env={}).load(toml_path=tmp_path / "absent.toml", required=True)


def test_loader_bad_toml(tmp_path):
    toml = tmp_path / "config.toml"
    toml.write_text("jobs = = 2\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        ConfigLoader(env={}).load(toml_path=toml)
