"""
repositories/base.py
--------------------
Contract implemented by every single-table repository.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from repositories.errors import Result

V = TypeVar("V")
K = TypeVar("K")


class Table(ABC, Generic[V, K]):
    """
    A repository bound to one table holding values of type V keyed by K.

    Every operation returns a Result instead of raising on database failures.
    """

    @property
    @abstractmethod
    def table_name(self) -> str:
        ...

    @abstractmethod
    def create_table(self) -> Result[bool]:
        ...

    @abstractmethod
    def drop_table(self) -> Result[bool]:
        ...

    @abstractmethod
    def find_by_primary_key(self, key: K) -> Result[V]:
        ...

    @abstractmethod
    def find_all(self) -> Result[list[V]]:
        ...

    @abstractmethod
    def save(self, value: V) -> Result[bool]:
        ...

    @abstractmethod
    def update(self, value: V) -> Result[bool]:
        ...

    @abstractmethod
    def delete(self, key: K) -> Result[bool]:
        ...
