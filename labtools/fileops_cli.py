"""Command line for the file utilities: xorN, mask <hex>, copyN and find <pattern>."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence

from labtools.fileops import (
    InvalidInputError,
    NumberError,
    check_n,
    copy_n,
    count_mask,
    find_string,
    xor_blocks,
)

EXIT_OK = 0
EXIT_INVALID_INPUT = 2
MAX_COPIES = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _run_xor(files: Sequence[str], suffix: str) -> int:
    n = _leading_int(suffix)
    if not 2 <= n <= 6:
        print("Неверное значение N. N должно быть >= 2 и <= 6")
        return EXIT_INVALID_INPUT
    for name in files:
        try:
            result = xor_blocks(name, n)
        except OSError:
            print(f"Проблема с файлом ({name})")
        else:
            print(f"Результат Xor [{name}]: {result}")
    return EXIT_OK


def _run_mask(files: Sequence[str], mask: str) -> int:
    for name in files:
        try:
            count = count_mask(name, mask)
        except OSError:
            print(f"Проблема с файлом ({name})")
        except InvalidInputError:
            print(f"Неверный ввод. Ошибка с {mask}: ")
            return EXIT_INVALID_INPUT
        else:
            print(f"Результат Mask [{name}]: {count}")
    return EXIT_OK


def _run_copy(files: Sequence[str], command: str) -> int:
    try:
        suffix = check_n(command)
    except NumberError:
        print("Ошибка с числом")
        return EXIT_OK
    copies = _leading_int(suffix)
    if not 0 <= copies <= MAX_COPIES:
        print("Слишком много копий")
        return EXIT_INVALID_INPUT
    for name in files:
        if copies:
            try:
                copy_n(name, copies)
            except OSError:
                print(f"Проблема с файлом. {name} не обработан")
                continue
        print(f"Файл {name} успешно обработан")
    return EXIT_OK


def _run_find(files: Sequence[str], pattern: str) -> int:
    found = find_string(files, pattern)
    print("Файлы успешно обработаны")
    for name, hit in zip(files, found):
        verdict = "найдена" if hit else "НЕ найдена"
        print(f"В файле: {name} строка {verdict}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command named by the trailing arguments over the files before them."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print("Неверный ввод. Введите флаг и название файла")
        return EXIT_INVALID_INPUT

    command, keyword = args[-1], args[-2]
    if command.startswith("xor"):
        return _run_xor(args[:-1], command[3:])
    if keyword == "mask":
        return _run_mask(args[:-2], command)
    if command.startswith("copy"):
        return _run_copy(args[:-1], command)
    if keyword.startswith("find"):
        return _run_find(args[:-2], command)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())