import stat
from datetime import date

from alpi.domain.sync import deploy_file, deploy_tree
from alpi.domain.sync.file_deploy import deploy_scripts
from alpi.infrastructure.execution.real import RealExecutor

TODAY = date(2026, 3, 14)


def mode_of(path):
    return stat.S_IMODE(path.stat().st_mode)


def test_missing_source_is_skipped(tmp_path, reporter):
    executor = RealExecutor()
    assert deploy_file(executor, reporter, tmp_path / "nope", tmp_path / "dest") is False
    assert not (tmp_path / "dest").exists()
    assert executor.journal == []
    assert any("not found" in m for m in reporter.messages("warn"))


def test_fresh_destination_gets_parents_and_mode(tmp_path, reporter):
    src = tmp_path / "src" / ".bashrc"
    src.parent.mkdir()
    src.write_text("alias ll='ls -l'\n")
    dest = tmp_path / "home" / "deep" / ".bashrc"

    assert deploy_file(RealExecutor(), reporter, src, dest, today=TODAY)
    assert dest.read_text() == "alias ll='ls -l'\n"
    assert mode_of(dest) == 0o644


def test_differing_destination_is_backed_up(tmp_path, reporter):
    src = tmp_path / "new"
    src.write_text("new\n")
    dest = tmp_path / ".xinitrc"
    dest.write_text("old\n")

    deploy_file(RealExecutor(), reporter, src, dest, today=TODAY)

    backup = tmp_path / ".xinitrc.bak.20260314"
    assert backup.read_text() == "old\n"
    assert dest.read_text() == "new\n"


def test_identical_destination_is_not_backed_up(tmp_path, reporter):
    src = tmp_path / "same"
    src.write_text("same\n")
    dest = tmp_path / "dest"
    dest.write_text("same\n")

    deploy_file(RealExecutor(), reporter, src, dest, today=TODAY)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["dest", "same"]


def test_redeploy_same_day_keeps_single_backup(tmp_path, reporter):
    dest = tmp_path / "dest"
    dest.write_text("v0\n")
    executor = RealExecutor()
    for version in ("v1\n", "v2\n"):
        src = tmp_path / "src"
        src.write_text(version)
        deploy_file(executor, reporter, src, dest, today=TODAY)

    backups = [p for p in tmp_path.iterdir() if ".bak." in p.name]
    assert len(backups) == 1
    assert backups[0].read_text() == "v1\n"
    assert dest.read_text() == "v2\n"


def test_deploy_tree_merges_without_backup(tmp_path, reporter):
    src = tmp_path / "config" / "rofi"
    (src / "themes").mkdir(parents=True)
    (src / "config.rasi").write_text("new\n")
    (src / "themes" / "dark.rasi").write_text("dark\n")
    dest = tmp_path / "home" / "rofi"
    dest.mkdir(parents=True)
    (dest / "config.rasi").write_text("old\n")
    (dest / "local.rasi").write_text("mine\n")

    assert deploy_tree(RealExecutor(), reporter, src, dest)

    assert (dest / "config.rasi").read_text() == "new\n"
    assert (dest / "themes" / "dark.rasi").read_text() == "dark\n"
    assert (dest / "local.rasi").read_text() == "mine\n"
    assert not any(".bak." in p.name for p in dest.iterdir())


def test_deploy_tree_missing_source(tmp_path, reporter):
    assert deploy_tree(RealExecutor(), reporter, tmp_path / "nope", tmp_path / "dest") is False
    assert not (tmp_path / "dest").exists()


def test_deploy_scripts_are_executable_and_filtered(tmp_path, reporter):
    src = tmp_path / "bin"
    src.mkdir()
    (src / "wallrotate.sh").write_text("#!/bin/sh\n")
    (src / "dwm-status.sh").write_text("#!/bin/sh\n")
    (src / "README").write_text("docs\n")
    (src / "lib.sh").mkdir()
    dest = tmp_path / ".local" / "bin"

    count = deploy_scripts(RealExecutor(), reporter, src, dest, "*.sh", today=TODAY)

    assert count == 2
    assert sorted(p.name for p in dest.iterdir()) == ["dwm-status.sh", "wallrotate.sh"]
    assert mode_of(dest / "wallrotate.sh") == 0o755
