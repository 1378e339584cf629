"""
main.py
-------
Entry point demonstrating the students repository against PostgreSQL.

Responsibilities:
    - Open a database connection from DATABASE_URL.
    - Create the students table and run a short CRUD walkthrough.
    - Drop the table again (unless --keep is given) and close the connection.
    - Log every SQL outcome at DEBUG level when --debug is given.

Usage:
    python main.py [--keep] [--debug]
"""

import sys
from datetime import date

from db.connection import connect, close_connection
from models.student import Student
from repositories.student_repo import StudentRepository
from utils.logger import get_logger, set_level

logger = get_logger(__name__)


def run_demo(repo: StudentRepository) -> None:
    """Exercise every repository operation once and log what comes back."""
    if not repo.create_table():
        logger.warning("Table already present, reusing it.")

    ada = Student(1, "Ada", "Lovelace", date(1815, 12, 10))
    alan = Student(2, "Alan", "Turing")
    for student in (ada, alan):
        result = repo.save(student)
        if not result:
            logger.warning(f"Could not save {student}: {result.kind.value}")

    for student in repo.find_all().unwrap():
        logger.info(f"Stored: {student}")

    born = repo.find_by_birthday(ada.birthday).unwrap()
    logger.info(f"Born on {ada.birthday}: {[str(s) for s in born]}")

    repo.update(Student(2, "Alan", "Turing", date(1912, 6, 23))).unwrap()
    logger.info(f"After update: {repo.find_by_primary_key(2).unwrap()}")

    repo.delete(2)
    missing = repo.find_by_primary_key(2)
    logger.info(f"Student 2 after delete: {missing.value_or(None)} ({missing.kind.value})")


def main() -> None:
    args = sys.argv[1:]
    keep = "--keep" in args
    if "--debug" in args:
        set_level("DEBUG")
    conn = connect()
    try:
        repo = StudentRepository(conn)
        run_demo(repo)
        if not keep:
            repo.drop_table()
    finally:
        close_connection(conn)


if __name__ == "__main__":
    main()
