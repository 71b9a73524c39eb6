import sys
from datetime import date

import pytest

from alpi.core import actions
from alpi.core.actions import SubstitutionRule, apply_rules
from alpi.core.exceptions import CommandError
from alpi.domain.sync import deploy_file, upsert_text_block
from alpi.infrastructure.execution.dry_run import DryRunExecutor
from alpi.infrastructure.execution.real import RealExecutor

TODAY = date(2026, 3, 14)


@pytest.fixture
def no_processes(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError(f"process spawned: {args[0] if args else kwargs}")
    monkeypatch.setattr(actions.subprocess, "run", boom)


def test_real_command_failure_raises(tmp_path):
    executor = RealExecutor()
    with pytest.raises(CommandError) as exc:
        executor.run(sys.executable, "-c", "import sys; sys.exit(3)", cwd=tmp_path)
    assert exc.value.returncode == 3
    assert exc.value.cwd == str(tmp_path)


def test_real_missing_binary_is_127():
    with pytest.raises(CommandError) as exc:
        RealExecutor().run("alpi-definitely-not-a-binary")
    assert exc.value.returncode == 127


def test_dry_run_prints_and_never_spawns(reporter, no_processes):
    executor = DryRunExecutor(reporter)
    result = executor.sudo("pacman", "-Syu", "--noconfirm")
    assert result.performed is False
    assert executor.journal == ["sudo pacman -Syu --noconfirm"]
    assert reporter.messages("say") == ["[dry-run] sudo pacman -Syu --noconfirm"]


def test_dry_run_command_description_includes_cwd(reporter, tmp_path):
    executor = DryRunExecutor(reporter)
    executor.run("make", "-j4", cwd=tmp_path)
    assert executor.journal == [f"make -j4  (in {tmp_path})"]


def test_dry_run_overlay_tracks_writes(tmp_path, reporter, no_processes):
    executor = DryRunExecutor(reporter)
    target = tmp_path / "a" / "b.txt"

    executor.write_text(target, "hello")

    assert not target.exists()
    assert executor.exists(target)
    assert executor.is_dir(tmp_path / "a")
    assert executor.read_text(target) == "hello"


def test_dry_run_overlay_tracks_moves_and_removals(tmp_path, reporter):
    src = tmp_path / "file"
    src.write_text("data")
    tree = tmp_path / "tree"
    (tree / "sub").mkdir(parents=True)
    executor = DryRunExecutor(reporter)

    executor.move(src, tmp_path / "moved")
    executor.remove_tree(tree)

    assert src.exists() and tree.exists()
    assert not executor.exists(src)
    assert executor.read_text(tmp_path / "moved") == "data"
    assert not executor.exists(tree / "sub")


def test_dry_run_journal_matches_real_run(tmp_path, reporter):
    src = tmp_path / "src"
    src.write_text("new\n")
    dest = tmp_path / "home" / ".bashrc"
    dest.parent.mkdir()
    dest.write_text("old\n")
    profile = tmp_path / "home" / ".bash_profile"

    def scenario(executor):
        deploy_file(executor, reporter, src, dest, today=TODAY)
        upsert_text_block(executor, profile, "ALPI ENV", "export EDITOR=nvim\n")
        upsert_text_block(executor, profile, "ALPI ENV", "export EDITOR=nvim\n")
        return executor.journal

    preview = scenario(DryRunExecutor(reporter))
    assert dest.read_text() == "old\n"
    assert not profile.exists()

    real = scenario(RealExecutor())
    assert preview == real
    assert dest.read_text() == "new\n"


def test_dry_run_substitution_preview(tmp_path, reporter):
    conf = tmp_path / "makepkg.conf"
    conf.write_text('#MAKEFLAGS="-j2"\n')
    executor = DryRunExecutor(reporter)

    executor.substitute(conf, [SubstitutionRule(r"#?MAKEFLAGS=.*", 'MAKEFLAGS="-j8"')])

    assert conf.read_text() == '#MAKEFLAGS="-j2"\n'
    assert executor.read_text(conf) == 'MAKEFLAGS="-j8"\n'


def test_real_substitution_rewrites_file(tmp_path):
    conf = tmp_path / "makepkg.conf"
    conf.write_text('#MAKEFLAGS="-j2"\nOPTIONS=(strip)\n')

    RealExecutor().substitute(conf, [SubstitutionRule(r"#?MAKEFLAGS=.*", 'MAKEFLAGS="-j8"')])

    assert conf.read_text() == 'MAKEFLAGS="-j8"\nOPTIONS=(strip)\n'


def test_privileged_substitution_reads_through_sudo(tmp_path, monkeypatch):
    conf = tmp_path / "snapper" / "root"
    calls = []

    class Completed:
        def __init__(self, stdout=b""):
            self.returncode = 0
            self.stdout = stdout
            self.stderr = b""

    def fake_run(argv, input=None, **kwargs):
        calls.append((argv, input))
        if argv[:2] == ["sudo", "cat"]:
            return Completed(b'TIMELINE_LIMIT_DAILY="10"\n')
        return Completed()
    monkeypatch.setattr(actions.subprocess, "run", fake_run)

    RealExecutor().substitute(
        conf,
        [SubstitutionRule(r"TIMELINE_LIMIT_DAILY=.*", 'TIMELINE_LIMIT_DAILY="7"', append_if_missing=False)],
        privileged=True,
    )

    assert calls[0][0] == ["sudo", "cat", str(conf)]
    tee = [c for c in calls if c[0][:2] == ["sudo", "tee"]]
    assert tee == [(["sudo", "tee", str(conf)], b'TIMELINE_LIMIT_DAILY="7"\n')]


def test_privileged_substitution_read_failure_raises(tmp_path, monkeypatch):
    class Denied:
        returncode = 1
        stdout = b""
        stderr = b"cat: Permission denied"
    monkeypatch.setattr(actions.subprocess, "run", lambda argv, **kwargs: Denied())

    with pytest.raises(CommandError):
        RealExecutor().substitute(tmp_path / "root", [SubstitutionRule("x", "y")], privileged=True)


class TestApplyRules:
    def test_first_match_replaced_later_dropped(self):
        text = "#Color\nfoo\nColor\n"
        assert apply_rules(text, (SubstitutionRule(r"#?Color", "Color"),)) == "Color\nfoo\n"

    def test_append_when_missing(self):
        text = "foo\n"
        assert apply_rules(text, (SubstitutionRule(r"#?Color", "Color"),)) == "foo\nColor\n"

    def test_no_append_when_disabled(self):
        rule = SubstitutionRule(r"#?Color", "Color", append_if_missing=False)
        assert apply_rules("foo\n", (rule,)) == "foo\n"

    def test_idempotent(self):
        rules = (
            SubstitutionRule(r"#?ParallelDownloads\s*=.*", "ParallelDownloads = 10"),
            SubstitutionRule(r"#?Color", "Color"),
        )
        once = apply_rules("#ParallelDownloads = 5\n", rules)
        assert apply_rules(once, rules) == once
        assert once == "ParallelDownloads = 10\nColor\n"
