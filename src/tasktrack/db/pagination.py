"""Offset pagination with whitelisted sorting.

Learn: Page numbers are zero-based and the sort spec is "field[,asc|desc]",
e.g. "title,desc". Only whitelisted columns can be sorted on — anything
else quietly falls back to the id column, so user input never reaches
the ORDER BY clause directly.
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 20
    sort: str = "id"

    def offset(self) -> int:
        return self.page * self.size

    def order_by(self, columns: dict[str, Any], default: str = "id"):
        """Resolve the sort spec against a {name: column} whitelist."""
        field, _, direction = self.sort.partition(",")
        column = columns.get(field.strip(), columns[default])
        if direction.strip().lower() == "desc":
            return column.desc()
        return column.asc()

    def apply(self, query: Select, columns: dict[str, Any]) -> Select:
        return (
            query.order_by(self.order_by(columns))
            .limit(self.size)
            .offset(self.offset())
        )


@dataclass
class Page(Generic[T]):
    content: Sequence[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)
