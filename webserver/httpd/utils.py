# httpd/utils.py
import os
import stat
from datetime import datetime
from typing import NamedTuple, Optional


class FileInfo(NamedTuple):
    exists: bool
    is_directory: bool
    length: int


MISSING = FileInfo(False, False, 0)


def stat_path(path: str) -> FileInfo:
    """Look up a local path. Missing or unreadable entries report MISSING."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        # ValueError: embedded NUL in the target
        return MISSING
    if stat.S_ISDIR(st.st_mode):
        return FileInfo(True, True, 0)
    return FileInfo(True, False, st.st_size)


def is_within(path: str, root: str) -> bool:
    try:
        real_root = os.path.realpath(root)
        real_path = os.path.realpath(path)
        return os.path.commonpath([real_root, real_path]) == real_root
    except ValueError:
        return False


def http_date(now: Optional[datetime] = None) -> str:
    """Format a timestamp like ``Mon Oct 19 14:03:05 CEST 2026``.

    The host's local timezone is used, not GMT.
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()
    return f"{now:%a %b} {now.day} {now:%H:%M:%S} {now.tzname()} {now.year}"
