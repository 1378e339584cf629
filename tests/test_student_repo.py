from datetime import date, datetime

import pytest

from models.student import Student
from repositories.errors import ErrorKind, NotFoundError
from repositories.student_repo import StudentRepository

ADA = Student(1, "Ada", "Lovelace", date(1815, 12, 10))
ALAN = Student(2, "Alan", "Turing")


def test_requires_connection():
    with pytest.raises(ValueError):
        StudentRepository(None)


def test_rejects_unknown_paramstyle(conn):
    with pytest.raises(ValueError):
        StudentRepository(conn, paramstyle="named")


def test_table_name(repo):
    assert repo.table_name == "students"


def test_create_table_twice_fails_without_raising(repo):
    result = repo.create_table()
    assert not result
    assert result.kind is ErrorKind.QUERY


def test_drop_table(repo):
    assert repo.drop_table()
    result = repo.drop_table()
    assert not result
    assert result.kind is ErrorKind.QUERY


def test_save_and_find_round_trip(repo):
    assert repo.save(ADA)
    assert repo.save(ALAN)

    assert repo.find_by_primary_key(1).unwrap() == ADA
    found = repo.find_by_primary_key(2).unwrap()
    assert found == ALAN
    assert found.birthday is None


def test_find_missing_key(repo):
    result = repo.find_by_primary_key(42)
    assert not result
    assert result.kind is ErrorKind.NOT_FOUND
    assert result.value_or(None) is None
    with pytest.raises(NotFoundError):
        result.unwrap()


def test_duplicate_id_keeps_first_row(repo):
    assert repo.save(ADA)
    result = repo.save(Student(1, "Someone", "Else"))
    assert not result
    assert result.kind is ErrorKind.CONSTRAINT_VIOLATION
    assert repo.find_all().unwrap() == [ADA]


def test_save_after_failure_still_works(repo):
    repo.save(ADA)
    repo.save(ADA)
    assert repo.save(ALAN)
    assert len(repo.find_all().unwrap()) == 2


def test_delete_missing_id_returns_false(repo):
    result = repo.delete(99)
    assert not result
    assert result.kind is ErrorKind.NOT_FOUND


def test_delete_existing(repo):
    repo.save(ADA)
    assert repo.delete(1)
    assert repo.find_all().unwrap() == []


def test_update_existing(repo):
    repo.save(ALAN)
    changed = Student(2, "Alan Mathison", "Turing", date(1912, 6, 23))
    assert repo.update(changed)
    assert repo.find_by_primary_key(2).unwrap() == changed


def test_update_can_clear_birthday(repo):
    repo.save(ADA)
    assert repo.update(Student(1, "Ada", "King"))
    assert repo.find_by_primary_key(1).unwrap().birthday is None


def test_update_missing_id_affects_nothing(repo):
    repo.save(ADA)
    result = repo.update(Student(7, "No", "Body"))
    assert not result
    assert result.kind is ErrorKind.NOT_FOUND
    assert repo.find_all().unwrap() == [ADA]


def test_find_by_birthday(repo):
    grace = Student(3, "Grace", "Hopper", date(1906, 12, 9))
    twin = Student(4, "Ada", "Twin", date(1815, 12, 10))
    for s in (ADA, ALAN, grace, twin):
        repo.save(s)

    found = repo.find_by_birthday(date(1815, 12, 10)).unwrap()
    assert sorted(found, key=lambda s: s.id) == [ADA, twin]
    assert repo.find_by_birthday(date(2000, 1, 1)).unwrap() == []


def test_find_by_birthday_ignores_time_of_day(repo):
    repo.save(ADA)
    assert repo.find_by_birthday(datetime(1815, 12, 10, 15, 30)).unwrap() == [ADA]


def test_find_all_matches_stored_set(repo):
    assert repo.find_all().unwrap() == []
    students = [Student(i, f"First{i}", f"Last{i}", date(2000, 1, i)) for i in (5, 3, 9, 1)]
    for s in students:
        repo.save(s)
    found = repo.find_all().unwrap()
    assert len(found) == 4
    assert set(found) == set(students)


def test_padding_and_null_names_are_normalized(conn, repo):
    conn.execute("INSERT INTO students VALUES (?, ?, ?, ?)", (3, "Grace   ", None, None))
    conn.commit()
    assert repo.find_by_primary_key(3).unwrap() == Student(3, "Grace", "", None)


def test_queries_without_table_report_query_error(conn):
    repo = StudentRepository(conn, paramstyle="qmark")
    result = repo.find_all()
    assert not result
    assert result.kind is ErrorKind.QUERY
    assert repo.find_by_birthday(date(1815, 12, 10)).kind is ErrorKind.QUERY
    assert repo.update(ADA).kind is ErrorKind.QUERY


def test_canonical_walkthrough(repo):
    assert repo.save(ADA)
    assert repo.save(ALAN)
    assert set(repo.find_all().unwrap()) == {ADA, ALAN}
    assert repo.find_by_birthday(date(1815, 12, 10)).unwrap() == [ADA]
    assert repo.delete(2)
    assert repo.find_by_primary_key(2).value_or(None) is None


def test_unreadable_birthday_is_reported_as_query_error(conn, repo):
    conn.execute("INSERT INTO students VALUES (?, ?, ?, ?)", (5, "Bad", "Date", "10/12/1815"))
    conn.commit()

    result = repo.find_all()
    assert not result
    assert result.kind is ErrorKind.QUERY
    assert isinstance(result.error.__cause__, ValueError)
    assert repo.find_by_primary_key(5).kind is ErrorKind.QUERY
