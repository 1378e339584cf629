"""
models/student.py
-----------------
Domain model for a student record.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Student:
    """
    Represents one row of the students table.

    Attributes:
        id: Primary key, unique per stored row.
        first_name: Given name.
        last_name: Family name.
        birthday: Calendar date of birth, or None when unknown.
    """
    id: int
    first_name: str
    last_name: str
    birthday: Optional[date] = None

    def __str__(self) -> str:
        born = self.birthday.isoformat() if self.birthday else "-"
        return f"#{self.id} {self.first_name} {self.last_name} (born {born})"
