"""User accounts kept in a plain-text database, and per-user request limits."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

MAX_LOGIN_LENGTH = 6
MAX_PIN = 1_000_000

DEFAULT_DATABASE = "database.txt"
DEFAULT_SANCTIONS = "sanctions.txt"


class AccountError(Exception):
    """Base class for account and sanction errors."""


class IncorrectLoginError(AccountError):
    """The login is empty, too long or holds characters other than letters and digits."""


class IncorrectPinError(AccountError):
    """The PIN is outside the allowed range."""


class UndefinedUserError(AccountError):
    """No matching user was found in the database."""


class SanctionInputError(AccountError):
    """A sanction was requested with invalid parameters."""


class SanctionLimitExceededError(AccountError):
    """A sanctioned user has used up the allowed number of requests."""


def is_valid_login(login: str) -> bool:
    """Return True for a login of 1 to 6 ASCII letters and digits."""
    if not isinstance(login, str):
        return False
    if not 1 <= len(login) <= MAX_LOGIN_LENGTH:
        return False
    return all(ch.isascii() and ch.isalnum() for ch in login)


def is_valid_pin(pin: int) -> bool:
    """Return True for a PIN between 0 and 1000000 inclusive."""
    return isinstance(pin, int) and not isinstance(pin, bool) and 0 <= pin <= MAX_PIN


def _validate_credentials(login: str, pin: int) -> None:
    if not is_valid_login(login):
        raise IncorrectLoginError(f"invalid login: {login!r}")
    if not is_valid_pin(pin):
        raise IncorrectPinError(f"invalid PIN: {pin!r}")


def _read_records(path: Path) -> list[tuple[str, int]]:
    """Read "name number" pairs until the first malformed one."""
    with open(path, encoding="utf-8") as fh:
        tokens = fh.read().split()
    records: list[tuple[str, int]] = []
    for name, number in zip(tokens[::2], tokens[1::2]):
        if len(name) > MAX_LOGIN_LENGTH:
            break
        try:
            value = int(number)
        except ValueError:
            break
        records.append((name, value))
    return records


class UserDatabase:
    """A text file holding one "login pin" record per line."""

    def __init__(self, path: str | Path = DEFAULT_DATABASE) -> None:
        self.path = Path(path)

    def sign_in(self, login: str, pin: int) -> None:
        """Register a new user by appending a record to the database."""
        _validate_credentials(login, pin)
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(f"{login} {pin}\n")

    def log_in(self, login: str, pin: int) -> None:
        """Check the credentials; raise UndefinedUserError if no record matches."""
        _validate_credentials(login, pin)
        if (login, pin) not in _read_records(self.path):
            raise UndefinedUserError(f"no user {login!r} with that PIN")

    def user_exists(self, username: str) -> bool:
        """Return True if a record with this login is present."""
        return any(name == username for name, _ in _read_records(self.path))


class SanctionsList:
    """Per-user limits on the number of requests in a session."""

    def __init__(self) -> None:
        self._limits: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._limits)

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self._limits.items())

    def __contains__(self, username: object) -> bool:
        return username in self._limits

    def add(
        self,
        username: str,
        max_requests: int,
        current_user: str,
        database: UserDatabase,
    ) -> None:
        """Set or update the request limit for another existing user."""
        if not username or not current_user or max_requests <= 0:
            raise SanctionInputError("invalid sanction parameters")
        if username == current_user:
            raise SanctionInputError("cannot sanction yourself")
        if not database.user_exists(username):
            raise UndefinedUserError(f"no user {username!r}")
        self._limits[username[:MAX_LOGIN_LENGTH]] = max_requests

    def check(self, username: str, request_count: int) -> int:
        """Count one request by the user and return the updated count.

        Users without a sanction are not counted. Raise
        SanctionLimitExceededError once the count passes the limit.
        """
        limit = self._limits.get(username)
        if limit is None:
            return request_count
        request_count += 1
        if request_count > limit:
            raise SanctionLimitExceededError(
                f"user {username!r} exceeded {limit} requests"
            )
        return request_count

    def limit_for(self, username: str) -> int | None:
        """Return the user's request limit, or None if there is none."""
        return self._limits.get(username)

    def save(self, path: str | Path = DEFAULT_SANCTIONS) -> None:
        """Write all sanctions to a file, replacing its contents."""
        with open(path, "w", encoding="utf-8") as fh:
            for username, limit in self._limits.items():
                fh.write(f"{username} {limit}\n")

    def load(self, path: str | Path = DEFAULT_SANCTIONS) -> None:
        """Add the sanctions stored in a file; existing entries take precedence."""
        for username, limit in _read_records(Path(path)):
            self._limits.setdefault(username, limit)

    def clear(self) -> None:
        """Remove every sanction."""
        self._limits.clear()