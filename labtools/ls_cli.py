"""Command line that lists the current directory, or each named subdirectory."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from labtools.listing import print_info, read_directory

EXIT_OK = 0
EXIT_OPEN_DIR_ERROR = 2
EXIT_STAT_ERROR = 5


def _list_current() -> int:
    if not os.path.isdir("."):
        print("Не удалось открыть данный каталог")
        return EXIT_OPEN_DIR_ERROR
    try:
        entries = read_directory(".")
    except OSError:
        print("Stat error")
        return EXIT_STAT_ERROR
    print_info(entries)
    return EXIT_OK


def _list_named(names: Sequence[str]) -> int:
    for position, name in enumerate(names):
        print(f"Для каталога {name}: ")
        if not os.path.isdir(f"./{name}"):
            print(f"Каталог '{name}' не найден в текущей директории")
            return EXIT_OPEN_DIR_ERROR
        try:
            entries = read_directory(name)
        except OSError:
            print("Не удалось получить данные по файлу")
            return EXIT_STAT_ERROR
        print_info(entries)
        if position + 1 != len(names):
            print()
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """List the current directory, or each directory named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return _list_current()
    return _list_named(args)


if __name__ == "__main__":
    sys.exit(main())