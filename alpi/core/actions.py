"""
Mutating actions

Every change alpi makes to the machine is described by one of these value
objects and handed to an Executor. ``describe()`` is what a dry run prints,
``perform()`` is what a real run does.
"""
import os
import re
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from .exceptions import CommandError, DeployError


def _sudo(privileged: bool) -> str:
    return "sudo " if privileged else ""


def _run_checked(
    argv: list[str],
    input_bytes: Optional[bytes] = None,
    capture: bool = False,
) -> bytes:
    """Run a helper command (used by privileged file actions); returns stdout when ``capture``"""
    try:
        p = subprocess.run(
            argv,
            input=input_bytes,
            stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise CommandError(argv, 127, stderr=str(e)) from e
    if p.returncode != 0:
        raise CommandError(argv, p.returncode, stderr=p.stderr.decode(errors="replace"))
    return p.stdout or b""


def _write_privileged(path: Path, data: bytes, mode: Optional[int]) -> None:
    _run_checked(["sudo", "mkdir", "-p", str(path.parent)])
    _run_checked(["sudo", "tee", str(path)], input_bytes=data)
    if mode is not None:
        _run_checked(["sudo", "chmod", f"{mode:o}", str(path)])


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one executed (or previewed) action"""
    action: "Action"
    performed: bool
    returncode: int = 0


class Action:
    """Base class of all mutating actions"""

    def describe(self) -> str:
        raise NotImplementedError

    def perform(self) -> None:
        raise NotImplementedError


# ============================================================
# Process Invocation
# ============================================================

@dataclass(frozen=True)
class RunCommand(Action):
    argv: Tuple[str, ...]
    cwd: Optional[str] = None
    input_text: Optional[str] = None

    def describe(self) -> str:
        text = shlex.join(self.argv)
        if self.cwd:
            text += f"  (in {self.cwd})"
        return text

    def perform(self) -> None:
        # Output is streamed straight to the terminal (pacman, make, git)
        try:
            p = subprocess.run(
                list(self.argv),
                cwd=self.cwd,
                input=self.input_text,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandError(self.argv, 127, cwd=self.cwd, stderr=str(e)) from e
        if p.returncode != 0:
            raise CommandError(self.argv, p.returncode, cwd=self.cwd)


# ============================================================
# Filesystem
# ============================================================

@dataclass(frozen=True)
class MakeDirs(Action):
    path: Path
    privileged: bool = False

    def describe(self) -> str:
        return f"{_sudo(self.privileged)}mkdir -p {self.path}"

    def perform(self) -> None:
        if self.privileged:
            _run_checked(["sudo", "mkdir", "-p", str(self.path)])
        else:
            self.path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class WriteFile(Action):
    path: Path
    content: str
    mode: Optional[int] = None
    privileged: bool = False

    def describe(self) -> str:
        text = f"{_sudo(self.privileged)}write {self.path}"
        if self.mode is not None:
            text += f" (mode {self.mode:o})"
        return text

    def perform(self) -> None:
        data = self.content.encode("utf-8")
        if self.privileged:
            _write_privileged(self.path, data, self.mode)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(data)
        if self.mode is not None:
            os.chmod(self.path, self.mode)


@dataclass(frozen=True)
class CopyFile(Action):
    source: Path
    dest: Path
    mode: int

    def describe(self) -> str:
        return f"install -Dm{self.mode:o} {self.source} {self.dest}"

    def perform(self) -> None:
        self.dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.source, self.dest)
        os.chmod(self.dest, self.mode)


@dataclass(frozen=True)
class MoveFile(Action):
    source: Path
    dest: Path

    def describe(self) -> str:
        return f"mv {self.source} {self.dest}"

    def perform(self) -> None:
        # os.replace overwrites an existing backup from the same day
        os.replace(self.source, self.dest)


@dataclass(frozen=True)
class CopyTree(Action):
    source: Path
    dest: Path

    def describe(self) -> str:
        return f"cp -rf {self.source}/. {self.dest}/"

    def perform(self) -> None:
        shutil.copytree(self.source, self.dest, symlinks=True, dirs_exist_ok=True)


@dataclass(frozen=True)
class RemoveTree(Action):
    path: Path

    def describe(self) -> str:
        return f"rm -rf {self.path}"

    def perform(self) -> None:
        if self.path.is_dir() and not self.path.is_symlink():
            shutil.rmtree(self.path)
        elif self.path.exists() or self.path.is_symlink():
            self.path.unlink()


# ============================================================
# In-place Line Substitution
# ============================================================

@dataclass(frozen=True)
class SubstitutionRule:
    """
    Replace the first line fully matching ``pattern`` with ``replacement``.

    Later matching lines are dropped and, when nothing matches and
    ``append_if_missing`` is set, the replacement is appended, so applying
    a rule repeatedly converges on exactly one line.
    """
    pattern: str
    replacement: str
    append_if_missing: bool = True

    def describe(self) -> str:
        return f"{self.pattern} -> {self.replacement}"


def apply_rules(text: str, rules: Tuple[SubstitutionRule, ...]) -> str:
    lines = text.splitlines()
    for rule in rules:
        compiled = re.compile(rule.pattern)
        out: list[str] = []
        matched = False
        for line in lines:
            if compiled.fullmatch(line):
                if not matched:
                    out.append(rule.replacement)
                    matched = True
                continue
            out.append(line)
        if not matched and rule.append_if_missing:
            out.append(rule.replacement)
        lines = out
    return "\n".join(lines) + "\n" if lines else ""


@dataclass(frozen=True)
class SubstituteInFile(Action):
    path: Path
    rules: Tuple[SubstitutionRule, ...] = field(default_factory=tuple)
    privileged: bool = False

    def describe(self) -> str:
        changes = "; ".join(rule.describe() for rule in self.rules)
        return f"{_sudo(self.privileged)}edit {self.path}: {changes}"

    def render(self, text: str) -> str:
        return apply_rules(text, self.rules)

    def perform(self) -> None:
        if self.privileged:
            original = _run_checked(["sudo", "cat", str(self.path)], capture=True).decode("utf-8")
        else:
            try:
                original = self.path.read_text(encoding="utf-8")
            except OSError as e:
                raise DeployError(f"Cannot read {self.path}: {e}") from e
        updated = self.render(original)
        if updated == original:
            return
        if self.privileged:
            _write_privileged(self.path, updated.encode("utf-8"), None)
        else:
            self.path.write_text(updated, encoding="utf-8")
