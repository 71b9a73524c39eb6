"""
Core utility functions
"""
from datetime import date
from pathlib import Path
from typing import FrozenSet, Optional

from .constants import BACKUP_DATE_FORMAT, BACKUP_SUFFIX


def parse_csv(value: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated flag value, dropping blanks"""
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def backup_path(dest: Path, today: Optional[date] = None) -> Path:
    """``dest.bak.YYYYMMDD``: at most one backup per file and day"""
    stamp = (today or date.today()).strftime(BACKUP_DATE_FORMAT)
    return dest.with_name(dest.name + BACKUP_SUFFIX + stamp)

