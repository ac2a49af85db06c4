import pytest

from labtools.accounts import (
    AccountError,
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


@pytest.fixture
def database(tmp_path):
    db = UserDatabase(tmp_path / "database.txt")
    db.sign_in("alice", 1234)
    db.sign_in("bob", 0)
    return db


@pytest.mark.parametrize("login", ["a", "abc123", "Z9"])
def test_valid_logins(login):
    assert is_valid_login(login) is True


@pytest.mark.parametrize("login", ["", "abcdefg", "ab cd", "ab-c", "абв", None])
def test_invalid_logins(login):
    assert is_valid_login(login) is False


@pytest.mark.parametrize("pin,expected", [(0, True), (1000000, True), (-1, False), (1000001, False)])
def test_pin_range(pin, expected):
    assert is_valid_pin(pin) is expected


def test_sign_in_writes_record(tmp_path):
    db = UserDatabase(tmp_path / "db.txt")
    db.sign_in("carol", 42)
    assert (tmp_path / "db.txt").read_text(encoding="utf-8") == "carol 42\n"


def test_log_in_accepts_registered_user(database):
    database.log_in("alice", 1234)
    assert database.user_exists("alice") is True


def test_log_in_rejects_wrong_pin(database):
    with pytest.raises(UndefinedUserError):
        database.log_in("alice", 4321)


def test_log_in_rejects_unknown_user(database):
    with pytest.raises(UndefinedUserError):
        database.log_in("dave", 1234)


def test_sign_in_validates_login(tmp_path):
    db = UserDatabase(tmp_path / "db.txt")
    with pytest.raises(IncorrectLoginError):
        db.sign_in("toolongname", 1)
    assert not (tmp_path / "db.txt").exists()


def test_sign_in_validates_pin(tmp_path):
    db = UserDatabase(tmp_path / "db.txt")
    with pytest.raises(IncorrectPinError):
        db.sign_in("eve", 2000000)


def test_errors_share_base_class(database):
    with pytest.raises(AccountError):
        database.log_in("x y", 1)


def test_missing_database_raises_oserror(tmp_path):
    db = UserDatabase(tmp_path / "absent.txt")
    with pytest.raises(FileNotFoundError):
        db.log_in("alice", 1)
    with pytest.raises(FileNotFoundError):
        db.user_exists("alice")


def test_user_exists(database):
    assert database.user_exists("bob") is True
    assert database.user_exists("carol") is False


def test_add_sanction_and_lookup(database):
    sanctions = SanctionsList()
    sanctions.add("bob", 3, "alice", database)
    assert sanctions.limit_for("bob") == 3
    assert "bob" in sanctions
    assert sanctions.limit_for("alice") is None


def test_add_sanction_updates_existing(database):
    sanctions = SanctionsList()
    sanctions.add("bob", 3, "alice", database)
    sanctions.add("bob", 7, "alice", database)
    assert len(sanctions) == 1
    assert sanctions.limit_for("bob") == 7


def test_cannot_sanction_self(database):
    sanctions = SanctionsList()
    with pytest.raises(SanctionInputError):
        sanctions.add("alice", 3, "alice", database)


@pytest.mark.parametrize("limit", [0, -5])
def test_sanction_limit_must_be_positive(database, limit):
    sanctions = SanctionsList()
    with pytest.raises(SanctionInputError):
        sanctions.add("bob", limit, "alice", database)


def test_sanction_unknown_user(database):
    sanctions = SanctionsList()
    with pytest.raises(UndefinedUserError):
        sanctions.add("zed", 2, "alice", database)
    assert len(sanctions) == 0


def test_check_counts_until_limit(database):
    sanctions = SanctionsList()
    sanctions.add("bob", 2, "alice", database)
    count = sanctions.check("bob", 0)
    assert count == 1
    count = sanctions.check("bob", count)
    assert count == 2
    with pytest.raises(SanctionLimitExceededError):
        sanctions.check("bob", count)


def test_check_ignores_unsanctioned_user():
    sanctions = SanctionsList()
    assert sanctions.check("alice", 5) == 5


def test_save_and_load_round_trip(database, tmp_path):
    sanctions = SanctionsList()
    sanctions.add("bob", 4, "alice", database)
    sanctions.add("alice", 9, "bob", database)
    path = tmp_path / "sanctions.txt"
    sanctions.save(path)

    restored = SanctionsList()
    restored.load(path)
    assert list(restored) == list(sanctions)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SanctionsList().load(tmp_path / "none.txt")


def test_clear(database):
    sanctions = SanctionsList()
    sanctions.add("bob", 1, "alice", database)
    sanctions.clear()
    assert len(sanctions) == 0
    assert sanctions.limit_for("bob") is None