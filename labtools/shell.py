"""Interactive login shell with time, date, elapsed-time and sanction commands."""

from __future__ import annotations

import contextlib
import re
import sys
from pathlib import Path
from typing import TextIO

from labtools.accounts import (
    DEFAULT_SANCTIONS,
    IncorrectLoginError,
    IncorrectPinError,
    SanctionInputError,
    SanctionLimitExceededError,
    SanctionsList,
    UndefinedUserError,
    UserDatabase,
    is_valid_login,
    is_valid_pin,
)
from labtools.clock import (
    DateBefore1970Error,
    DateInFutureError,
    InvalidDateFormatError,
    InvalidDateValueError,
    InvalidFlagError,
    current_date,
    current_time,
    howmuch,
)

CONFIRMATION_CODE = 12345

_INT_RE = re.compile(r"[+-]?\d+")

_MENU = (
    "------------------------------------------------\n"
    "1. Time - текущее время\n"
    "2. Date - текущая дата\n"
    "3. Howmuch <дата> <флаг>\n"
    "4. Logout - выход\n"
    "5. Sanctions <user> <limit>\n"
    "------------------------------------------------\n"
    "Выбор: "
)

_HOWMUCH_ERRORS = (
    (InvalidDateFormatError, "Неверный формат даты. Используйте дд.мм.гггг"),
    (DateBefore1970Error, "К сожалению, даты до 1970 года не обрабатываются программой"),
    (InvalidDateValueError, "Неверное значение даты. Проверьте день, месяц и год"),
    (DateInFutureError, "Дата не может быть в будущем"),
    (InvalidFlagError, "Неверный флаг. Допустимые флаги: -s, -m, -h, -y"),
)


def menu_text() -> str:
    """Return the session menu, ending with the choice prompt."""
    return _MENU


class _Scanner:
    """Reads whole lines or whitespace-separated tokens from a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._buf = ""

    def _fill(self) -> bool:
        line = self._stream.readline()
        if not line:
            return False
        self._buf += line
        return True

    def readline(self) -> str | None:
        """Return the rest of the current line without its newline, or None at EOF."""
        if not self._buf and not self._fill():
            return None
        line, _, rest = self._buf.partition("\n")
        self._buf = rest
        return line

    def _skip_space(self) -> bool:
        while True:
            stripped = self._buf.lstrip()
            if stripped:
                self._buf = stripped
                return True
            self._buf = ""
            if not self._fill():
                return False

    def token(self, width: int) -> str | None:
        """Return up to ``width`` non-space characters, or None at EOF."""
        if not self._skip_space():
            return None
        match = re.match(rf"\S{{1,{width}}}", self._buf)
        if match is None:
            return None
        self._buf = self._buf[match.end():]
        return match.group()

    def integer(self) -> int | None:
        """Return the next integer, or None if the input does not start with one."""
        if not self._skip_space():
            return None
        match = _INT_RE.match(self._buf)
        if match is None:
            return None
        self._buf = self._buf[match.end():]
        return int(match.group())

    def discard_line(self) -> None:
        """Drop everything up to and including the next newline."""
        while "\n" not in self._buf:
            self._buf = ""
            if not self._fill():
                return
        self._buf = self._buf.partition("\n")[2]


class _Shell:
    def __init__(
        self,
        scanner: _Scanner,
        out: TextIO,
        database: UserDatabase,
        sanctions_path: Path,
    ) -> None:
        self.scanner = scanner
        self.out = out
        self.database = database
        self.sanctions_path = sanctions_path
        self.sanctions = SanctionsList()

    def say(self, text: str) -> None:
        self.out.write(text + "\n")

    def prompt(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def run(self) -> int:
        while True:
            self.prompt("1 - Вход, 2 - Регистрация, 3 - Выход из программы: ")
            line = self.scanner.readline()
            if line is None:
                self.say("Ошибка ввода")
                return 0
            if line not in ("1", "2", "3"):
                self.say("Неверный ввод. Введите 1, 2 или 3.")
                continue
            choice = int(line)
            if choice == 3:
                self.say("Выход из программы")
                with contextlib.suppress(OSError):
                    self.sanctions_path.write_text("", encoding="utf-8")
                self.sanctions.clear()
                return 0

            login = self.authenticate(choice)
            if login is None:
                if self.scanner_exhausted:
                    return 0
                continue

            try:
                self.sanctions.load(self.sanctions_path)
            except OSError:
                self.say("Не удалось загрузить ограничения")

            self.session(login)

            with contextlib.suppress(OSError):
                self.sanctions.save(self.sanctions_path)
            self.sanctions.clear()

    scanner_exhausted = False

    def authenticate(self, choice: int) -> str | None:
        self.prompt("Введите логин (до 6 символов): ")
        login = self.scanner.readline()
        if login is None:
            self.say("Ошибка ввода логина")
            self.scanner_exhausted = True
            return None
        if not is_valid_login(login):
            self.say(
                "Некорректный логин! Должен быть от 1 до 6 символов (буквы и цифры)"
            )
            return None

        if choice == 2:
            try:
                exists = self.database.user_exists(login)
            except OSError:
                exists = False
            if exists:
                self.say(f"Ошибка: Пользователь '{login}' уже существует")
                return None

        self.prompt("Введите PIN-код (0-1000000): ")
        pin = self.scanner.integer()
        self.scanner.discard_line()
        if pin is None:
            self.say("Ошибка: Введите целое число для PIN")
            return None
        if not is_valid_pin(pin):
            self.say("Некорректный PIN! Должен быть от 0 до 1000000")
            return None

        try:
            if choice == 1:
                self.database.log_in(login, pin)
            else:
                self.database.sign_in(login, pin)
        except UndefinedUserError:
            self.say("Ошибка: Пользователь не найден")
            return None
        except IncorrectLoginError:
            self.say("Ошибка: Неверный логин")
            return None
        except IncorrectPinError:
            self.say("Ошибка: Неверный PIN")
            return None
        except OSError:
            self.say("Ошибка: Проблема с доступом к базе данных")
            return None

        self.say("Успешная авторизация")
        return login

    def session(self, login: str) -> None:
        request_count = 0
        while True:
            self.prompt(menu_text())
            line = self.scanner.readline()
            if line is None:
                self.say("Ошибка ввода команды")
                return
            if len(line) != 1 or line not in "12345":
                self.say("Неверная команда. Введите число от 1 до 5.")
                continue

            try:
                request_count = self.sanctions.check(login, request_count)
            except SanctionLimitExceededError:
                self.say("Превышен лимит запросов! Возврат в меню авторизации.")
                return

            command = int(line)
            if command == 1:
                self.say(f"Текущее время: {current_time()}")
            elif command == 2:
                self.say(f"Текущая дата: {current_date()}")
            elif command == 3:
                self.elapsed()
            elif command == 4:
                self.say("Выход в меню авторизации")
                return
            else:
                self.sanction(login)

    def elapsed(self) -> None:
        self.prompt("Введите дату (дд.мм.гггг): ")
        date = self.scanner.token(10)
        if date is None:
            self.say("Ошибка ввода даты")
            self.scanner.discard_line()
            return
        self.prompt("Введите флаг (-s, -m, -h, -y): ")
        flag = self.scanner.token(2)
        if flag is None:
            self.say("Ошибка ввода флага")
            self.scanner.discard_line()
            return
        self.scanner.discard_line()

        try:
            self.say(howmuch(date, flag))
        except tuple(error for error, _ in _HOWMUCH_ERRORS) as exc:
            self.say(next(msg for error, msg in _HOWMUCH_ERRORS if isinstance(exc, error)))

    def sanction(self, login: str) -> None:
        self.prompt("Введите имя пользователя и лимит запросов: ")
        username = self.scanner.token(6)
        limit = self.scanner.integer() if username is not None else None
        if limit is None:
            self.say("Неверный формат ввода")
            self.scanner.discard_line()
            return
        self.scanner.discard_line()

        self.prompt(f"Введите {CONFIRMATION_CODE} для подтверждения: ")
        confirmation = self.scanner.integer()
        if confirmation != CONFIRMATION_CODE:
            self.say("Отмена операции")
            self.scanner.discard_line()
            return
        self.scanner.discard_line()

        try:
            self.sanctions.add(username, limit, login, self.database)
        except SanctionInputError:
            if username == login:
                self.say("Ошибка: Нельзя накладывать ограничения на себя")
            else:
                self.say("Ошибка: Неверные параметры санкции")
        except UndefinedUserError:
            self.say("Ошибка: Пользователь не найден")
        except OSError:
            self.say("Неизвестная ошибка")
        else:
            self.say(f"Ограничения установлены для {username}")


def run_shell(
    input_stream: TextIO,
    output_stream: TextIO,
    database: UserDatabase | None = None,
    sanctions_path: str | Path = DEFAULT_SANCTIONS,
) -> int:
    """Run the login shell over the given streams; return the exit status."""
    shell = _Shell(
        _Scanner(input_stream),
        output_stream,
        database if database is not None else UserDatabase(),
        Path(sanctions_path),
    )
    status = shell.run()
    output_stream.flush()
    return status


def main(argv: list[str] | None = None) -> int:
    """Start the shell on standard input and output."""
    return run_shell(sys.stdin, sys.stdout, UserDatabase(), DEFAULT_SANCTIONS)


if __name__ == "__main__":
    sys.exit(main())