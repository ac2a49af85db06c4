"""Long-format directory listing: type, permissions, links, owner, size, time, name, inode."""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, TextIO

try:
    import grp
    import pwd
except ImportError:  # platforms without a user database
    grp = None
    pwd = None

_TYPE_CHARS = (
    (stat.S_ISDIR, "d"),
    (stat.S_ISREG, "-"),
    (stat.S_ISLNK, "l"),
    (stat.S_ISFIFO, "p"),
    (stat.S_ISCHR, "c"),
    (stat.S_ISBLK, "b"),
)

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


@dataclass(frozen=True)
class FileEntry:
    """What the listing shows about one directory entry."""

    type_and_rights: str
    hard_links: int
    owner: str
    group: str
    size: int
    update_time: str
    name: str
    inode: int

    def format(self) -> str:
        """Return the entry as one line of the listing, without a newline."""
        return (
            f"{self.type_and_rights} {self.hard_links} {self.owner} {self.group} "
            f"{self.size} {self.update_time} {self.name} {self.inode}"
        )


def file_type_char(mode: int) -> str:
    """Return the ls-style type letter for a file mode, or '?' for other types."""
    for test, char in _TYPE_CHARS:
        if test(mode):
            return char
    return "?"


def permissions_string(mode: int) -> str:
    """Return the nine rwx characters for owner, group and others."""
    return "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)


def _owner_name(uid: int) -> str:
    if pwd is None:
        return ""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return ""


def _group_name(gid: int) -> str:
    if grp is None:
        return ""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return ""


def _format_mtime(timestamp: float) -> str:
    moment = datetime.fromtimestamp(timestamp)
    return f"{moment:%b} {moment.day:>2} {moment:%H:%M}"


def _entry(name: str, info: os.stat_result) -> FileEntry:
    return FileEntry(
        type_and_rights=file_type_char(info.st_mode) + permissions_string(info.st_mode),
        hard_links=info.st_nlink,
        owner=_owner_name(info.st_uid),
        group=_group_name(info.st_gid),
        size=info.st_size,
        update_time=_format_mtime(info.st_mtime),
        name=name,
        inode=info.st_ino,
    )


def read_directory(dir_path: str | Path) -> list[FileEntry]:
    """Describe every entry of the directory except '.' and '..'.

    Symbolic links are followed. Raise OSError if the directory cannot be
    read or an entry cannot be examined.
    """
    with os.scandir(dir_path) as entries:
        names = [entry.name for entry in entries if entry.name not in (".", "..")]
    return [_entry(name, os.stat(os.path.join(dir_path, name))) for name in names]


def print_info(entries: Iterable[FileEntry], stream: TextIO | None = None) -> None:
    """Write one listing line per entry."""
    out = stream if stream is not None else sys.stdout
    for entry in entries:
        out.write(entry.format() + "\n")