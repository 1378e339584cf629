"""
repositories/student_repo.py
-----------------------------
Data access layer for student records.
All SQL queries related to the `students` table live here.

Table and column names are fixed constants concatenated into the query
text; every value is passed as a bound parameter.
"""

from contextlib import closing
from datetime import date
from typing import Optional

from models.student import Student
from repositories.base import Table
from repositories.errors import (
    NotFoundError,
    QueryError,
    RepositoryError,
    Result,
    classify_db_error,
)
from utils.dates import from_sql_date, to_sql_date
from utils.logger import get_logger

logger = get_logger(__name__)

# DB-API paramstyle -> positional placeholder
_PLACEHOLDERS = {
    "format": "%s",
    "pyformat": "%s",
    "qmark": "?",
}


class StudentRepository(Table[Student, int]):
    """Repository for CRUD operations on the students table."""

    TABLE_NAME = "students"

    def __init__(self, connection, paramstyle: str = "format"):
        """
        Args:
            connection: An open DB-API connection. Owned by the caller;
                the repository never closes it.
            paramstyle: The driver's DB-API paramstyle ("format" for
                psycopg2, "qmark" for sqlite3).

        Raises:
            ValueError: If the connection is None or the paramstyle is unsupported.
        """
        if connection is None:
            raise ValueError("StudentRepository requires an open connection.")
        if paramstyle not in _PLACEHOLDERS:
            raise ValueError(f"Unsupported paramstyle: {paramstyle!r}")
        self._conn = connection
        self._ph = _PLACEHOLDERS[paramstyle]

    @property
    def table_name(self) -> str:
        return self.TABLE_NAME

    # ── SCHEMA ────────────────────────────────────────────

    def create_table(self) -> Result[bool]:
        """
        Create the students table.

        Returns:
            Result(True) on success; a failed Result if the statement is
            rejected, e.g. because the table already exists.
        """
        sql = (
            "CREATE TABLE " + self.TABLE_NAME + " ("
            "id INTEGER NOT NULL PRIMARY KEY, "
            "firstName CHAR(40), "
            "lastName CHAR(40), "
            "birthday DATE"
            ")"
        )
        try:
            self._execute_write(sql)
        except RepositoryError as e:
            logger.error(f"Failed to create table {self.TABLE_NAME}: {e.__cause__}")
            return Result.failure(e)
        logger.info(f"Created table {self.TABLE_NAME}")
        return Result.success(True)

    def drop_table(self) -> Result[bool]:
        """Drop the students table. Fails if it does not exist."""
        try:
            self._execute_write("DROP TABLE " + self.TABLE_NAME)
        except RepositoryError as e:
            logger.error(f"Failed to drop table {self.TABLE_NAME}: {e.__cause__}")
            return Result.failure(e)
        logger.info(f"Dropped table {self.TABLE_NAME}")
        return Result.success(True)

    # ── CREATE ────────────────────────────────────────────

    def save(self, student: Student) -> Result[bool]:
        """
        Insert a new student row. An absent birthday is stored as NULL.

        Args:
            student: The Student to persist.

        Returns:
            Result(True) if exactly one row was inserted; a failed Result
            with ErrorKind.CONSTRAINT_VIOLATION for a duplicate id.
        """
        sql = "INSERT INTO " + self.TABLE_NAME + " VALUES ({0}, {0}, {0}, {0})".format(self._ph)
        try:
            affected = self._execute_write(sql, self._student_params(student))
        except RepositoryError as e:
            logger.error(f"Failed to save student {student.id}: {e.__cause__}")
            return Result.failure(e)
        if affected != 1:
            return Result.failure(QueryError(f"Insert of student {student.id} affected {affected} rows"))
        logger.info(f"Saved student #{student.id}")
        return Result.success(True)

    # ── READ ──────────────────────────────────────────────

    def find_by_primary_key(self, student_id: int) -> Result[Student]:
        """
        Fetch a single student by id.

        Returns:
            Result holding the Student, or a failed Result with
            ErrorKind.NOT_FOUND when no row matches.
        """
        sql = "SELECT * FROM " + self.TABLE_NAME + " WHERE id = " + self._ph
        try:
            students = self._execute_query(sql, (student_id,))
        except RepositoryError as e:
            logger.error(f"Failed to fetch student {student_id}: {e.__cause__}")
            return Result.failure(e)
        if not students:
            logger.warning(f"Student {student_id} not found")
            return Result.failure(NotFoundError(f"No student with id {student_id}"))
        return Result.success(students[0])

    def find_all(self) -> Result[list[Student]]:
        """Fetch every stored student, in the order the database returns them."""
        try:
            return Result.success(self._execute_query("SELECT * FROM " + self.TABLE_NAME))
        except RepositoryError as e:
            logger.error(f"Failed to fetch students: {e.__cause__}")
            return Result.failure(e)

    def find_by_birthday(self, birthday: date) -> Result[list[Student]]:
        """
        Fetch all students born on the given calendar date.

        Args:
            birthday: The date to match. A datetime is truncated to its date.

        Returns:
            Result holding the (possibly empty) list of matching students.
        """
        sql = "SELECT * FROM " + self.TABLE_NAME + " WHERE birthday = " + self._ph
        try:
            return Result.success(self._execute_query(sql, (to_sql_date(birthday),)))
        except RepositoryError as e:
            logger.error(f"Failed to fetch students born {birthday}: {e.__cause__}")
            return Result.failure(e)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, student: Student) -> Result[bool]:
        """
        Overwrite every column of the row identified by `student.id`.

        The id is bound both as SET target and WHERE predicate, so a key
        cannot be renamed through this call.

        Returns:
            Result(True) if a row was updated; a failed Result with
            ErrorKind.NOT_FOUND when no row has that id.
        """
        sql = (
            "UPDATE " + self.TABLE_NAME + " SET id = {0}, firstName = {0}, "
            "lastName = {0}, birthday = {0} WHERE id = {0}"
        ).format(self._ph)
        params = self._student_params(student) + (student.id,)
        try:
            affected = self._execute_write(sql, params)
        except RepositoryError as e:
            logger.error(f"Failed to update student {student.id}: {e.__cause__}")
            return Result.failure(e)
        if affected == 0:
            logger.warning(f"Update skipped: student {student.id} not found")
            return Result.failure(NotFoundError(f"No student with id {student.id}"))
        logger.info(f"Updated student #{student.id}")
        return Result.success(True)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, student_id: int) -> Result[bool]:
        """
        Delete the student with the given id.

        Returns:
            Result(True) if a row was deleted; a failed Result with
            ErrorKind.NOT_FOUND when no row has that id.
        """
        sql = "DELETE FROM " + self.TABLE_NAME + " WHERE id = " + self._ph
        try:
            affected = self._execute_write(sql, (student_id,))
        except RepositoryError as e:
            logger.error(f"Failed to delete student {student_id}: {e.__cause__}")
            return Result.failure(e)
        if affected == 0:
            logger.warning(f"Delete skipped: student {student_id} not found")
            return Result.failure(NotFoundError(f"No student with id {student_id}"))
        logger.info(f"Deleted student #{student_id}")
        return Result.success(True)

    # ── HELPERS ───────────────────────────────────────────

    def _execute_write(self, sql: str, params: tuple = ()) -> int:
        """Run a DDL/DML statement, commit, and return the affected row count."""
        try:
            with closing(self._conn.cursor()) as cur:
                self._run(cur, sql, params)
                affected = cur.rowcount
            self._conn.commit()
            return affected
        except self._driver_error as e:
            raise self._fail(e, sql) from e

    def _execute_query(self, sql: str, params: tuple = ()) -> list[Student]:
        """Run a SELECT and map every returned row to a Student."""
        try:
            with closing(self._conn.cursor()) as cur:
                self._run(cur, sql, params)
                columns = [d[0].lower() for d in cur.description]
                rows = cur.fetchall()
        except self._driver_error as e:
            raise self._fail(e, sql) from e
        try:
            return [self._row_to_student(dict(zip(columns, r))) for r in rows]
        except (KeyError, TypeError, ValueError) as e:
            error = QueryError(f"Unreadable {self.TABLE_NAME} row: {e!r} [{sql}]")
            raise error from e

    @staticmethod
    def _run(cur, sql: str, params: tuple) -> None:
        logger.debug(f"SQL: {sql} params={params}")
        if params:
            cur.execute(sql, params)
        else:
            cur.execute(sql)

    @property
    def _driver_error(self) -> type:
        return getattr(self._conn, "Error", Exception)

    def _fail(self, exc: Exception, sql: str) -> RepositoryError:
        """Roll back the failed statement and translate the driver error."""
        connection_lost = False
        try:
            self._conn.rollback()
        except self._driver_error as e:
            logger.warning(f"Rollback failed after error: {e}")
            connection_lost = True
        return classify_db_error(self._conn, exc, f"{exc} [{sql}]", connection_lost=connection_lost)

    @staticmethod
    def _student_params(student: Student) -> tuple:
        return (
            student.id,
            student.first_name,
            student.last_name,
            to_sql_date(student.birthday),
        )

    @staticmethod
    def _row_to_student(row: dict) -> Student:
        """Convert a column-name -> value mapping into a Student."""
        return Student(
            id=int(row["id"]),
            first_name=_strip_padding(row["firstname"]),
            last_name=_strip_padding(row["lastname"]),
            birthday=from_sql_date(row["birthday"]),
        )


def _strip_padding(value: Optional[str]) -> str:
    # CHAR(n) columns come back right-padded on PostgreSQL
    return (value or "").rstrip(" ")
