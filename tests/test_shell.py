import datetime
import io
import re

from labtools.accounts import UserDatabase
from labtools.shell import main, menu_text, run_shell


def run(tmp_path, text, users=None):
    db_path = tmp_path / "database.txt"
    if users is not None:
        db_path.write_text("".join(f"{u} {p}\n" for u, p in users), encoding="utf-8")
    out = io.StringIO()
    status = run_shell(
        io.StringIO(text), out, UserDatabase(db_path), tmp_path / "sanctions.txt"
    )
    return status, out.getvalue()


def test_menu_text_lists_commands():
    text = menu_text()
    assert "5. Sanctions <user> <limit>\n" in text
    assert "1. Time - текущее время\n" in text
    assert text.endswith("Выбор: ")


def test_exit_truncates_sanctions_file(tmp_path):
    (tmp_path / "sanctions.txt").write_text("bob 3\n", encoding="utf-8")
    status, out = run(tmp_path, "3\n")
    assert status == 0
    assert "Выход из программы\n" in out
    assert (tmp_path / "sanctions.txt").read_text(encoding="utf-8") == ""


def test_invalid_main_choice(tmp_path):
    _, out = run(tmp_path, "7\n3\n")
    assert "Неверный ввод. Введите 1, 2 или 3.\n" in out
    assert out.endswith("Выход из программы\n")


def test_register_then_log_in(tmp_path):
    _, out = run(tmp_path, "2\nbob\n1234\n4\n1\nbob\n1234\n4\n3\n")
    assert (tmp_path / "database.txt").read_text(encoding="utf-8") == "bob 1234\n"
    assert out.count("Успешная авторизация\n") == 2
    assert out.count("Выход в меню авторизации\n") == 2


def test_register_existing_user(tmp_path):
    _, out = run(tmp_path, "2\nbob\n3\n", users=[("bob", 1)])
    assert "Ошибка: Пользователь 'bob' уже существует\n" in out


def test_invalid_login(tmp_path):
    _, out = run(tmp_path, "1\ntoolongname\n3\n")
    assert "Некорректный логин!" in out
    assert "Успешная авторизация" not in out


def test_non_numeric_pin(tmp_path):
    _, out = run(tmp_path, "1\nbob\nabc\n3\n", users=[("bob", 1)])
    assert "Ошибка: Введите целое число для PIN\n" in out
    assert out.endswith("Выход из программы\n")


def test_pin_out_of_range(tmp_path):
    _, out = run(tmp_path, "2\nbob\n2000000\n3\n")
    assert "Некорректный PIN! Должен быть от 0 до 1000000\n" in out
    assert not (tmp_path / "database.txt").exists()


def test_unknown_user(tmp_path):
    _, out = run(tmp_path, "1\nbob\n5\n3\n", users=[("bob", 1)])
    assert "Ошибка: Пользователь не найден\n" in out


def test_missing_database(tmp_path):
    _, out = run(tmp_path, "1\nbob\n5\n3\n")
    assert "Ошибка: Проблема с доступом к базе данных\n" in out


def test_time_and_date_commands(tmp_path):
    before = datetime.date.today()
    _, out = run(tmp_path, "1\nbob\n1\n1\n2\n4\n3\n", users=[("bob", 1)])
    after = datetime.date.today()

    times = re.findall(r"Текущее время: (\d\d):(\d\d):(\d\d)\n", out)
    assert len(times) == 1
    hours, minutes, seconds = (int(part) for part in times[0])
    assert 0 <= hours < 24
    assert 0 <= minutes < 60
    assert 0 <= seconds < 61

    dates = re.findall(r"Текущая дата: (\d\d)\.(\d\d)\.(\d{4})\n", out)
    assert len(dates) == 1
    day, month, year = (int(part) for part in dates[0])
    assert datetime.date(year, month, day) in {before, after}


def test_missing_sanctions_file_reported(tmp_path):
    _, out = run(tmp_path, "1\nbob\n1\n4\n3\n", users=[("bob", 1)])
    assert "Не удалось загрузить ограничения\n" in out


def test_invalid_command(tmp_path):
    _, out = run(tmp_path, "1\nbob\n1\n9\n4\n3\n", users=[("bob", 1)])
    assert "Неверная команда. Введите число от 1 до 5.\n" in out


def test_howmuch_years(tmp_path):
    _, out = run(tmp_path, "1\nbob\n1\n3\n01.01.2000 -y\n4\n3\n", users=[("bob", 1)])
    values = re.findall(r"Прошло лет: (\d+\.\d)\n", out)
    assert len(values) == 1
    years = float(values[0])
    elapsed_years = datetime.date.today().year - 2000
    assert elapsed_years - 1 <= years <= elapsed_years + 1


def test_howmuch_errors(tmp_path):
    text = (
        "1\nbob\n1\n"
        "3\n01.01.3000 -s\n"
        "3\n01.01.1960 -s\n"
        "3\n01.01.2000 -x\n"
        "3\n31.02.2001 -s\n"
        "4\n3\n"
    )
    _, out = run(tmp_path, text, users=[("bob", 1)])
    assert "Дата не может быть в будущем\n" in out
    assert "К сожалению, даты до 1970 года не обрабатываются программой\n" in out
    assert "Неверный флаг. Допустимые флаги: -s, -m, -h, -y\n" in out
    assert "Неверное значение даты. Проверьте день, месяц и год\n" in out


def test_sanction_is_saved_and_enforced(tmp_path):
    users = [("alice", 1), ("bob", 2)]
    text = "1\nalice\n1\n5\nbob 2\n12345\n4\n1\nbob\n2\n1\n1\n1\n"
    _, out = run(tmp_path, text, users=users)
    assert "Ограничения установлены для bob\n" in out
    assert "Превышен лимит запросов! Возврат в меню авторизации.\n" in out
    assert (tmp_path / "sanctions.txt").read_text(encoding="utf-8") == "bob 2\n"


def test_cannot_sanction_self(tmp_path):
    _, out = run(tmp_path, "1\nbob\n1\n5\nbob 2\n12345\n4\n3\n", users=[("bob", 1)])
    assert "Ошибка: Нельзя накладывать ограничения на себя\n" in out


def test_sanction_needs_confirmation(tmp_path):
    users = [("alice", 1), ("bob", 2)]
    _, out = run(tmp_path, "1\nalice\n1\n5\nbob 2\n999\n4\n3\n", users=users)
    assert "Отмена операции\n" in out
    assert "Ограничения установлены" not in out


def test_sanction_unknown_user(tmp_path):
    _, out = run(tmp_path, "1\nbob\n1\n5\ncarol 2\n12345\n4\n3\n", users=[("bob", 1)])
    assert "Ошибка: Пользователь не найден\n" in out


def test_sanction_bad_format(tmp_path):
    _, out = run(tmp_path, "1\nbob\n1\n5\ncarol x\n4\n3\n", users=[("bob", 1)])
    assert "Неверный формат ввода\n" in out


def test_end_of_input_stops(tmp_path):
    status, out = run(tmp_path, "")
    assert status == 0
    assert out.endswith("Ошибка ввода\n")


def test_main_uses_standard_streams(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n"))
    monkeypatch.setattr("sys.stdout", out)
    assert main() == 0
    assert "Выход из программы\n" in out.getvalue()
    assert (tmp_path / "sanctions.txt").read_text(encoding="utf-8") == ""