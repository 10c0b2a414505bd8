"""Record table shared by every renderer."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class RecordTable(BaseModel):
    """Ordered columns plus rows of pre-formatted string cells.

    Every row holds exactly ``len(columns)`` cells.
    """

    columns: tuple[str, ...]
    rows: list[tuple[str, ...]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_row_widths(self) -> RecordTable:
        for index, row in enumerate(self.rows):
            if len(row) != len(self.columns):
                raise ValueError(
                    f"row {index} has {len(row)} cells, expected {len(self.columns)}"
                )
        return self

    @property
    def width(self) -> int:
        return len(self.columns)

    def __len__(self) -> int:
        return len(self.rows)

    def add_row(self, cells: Sequence[Any]) -> None:
        """Append one row, stringifying cells.

        Raises:
            ValueError: If the cell count does not match the column count.
        """
        row = tuple(str(cell) for cell in cells)
        if len(row) != len(self.columns):
            raise ValueError(
                f"row has {len(row)} cells, expected {len(self.columns)}"
            )
        self.rows.append(row)

    @classmethod
    def from_records(
        cls,
        columns: Sequence[str],
        records: Iterable[T],
        project: Callable[[T], Sequence[Any]],
        sort_key: Callable[[T], Any] | None = None,
    ) -> RecordTable:
        """Build a table by projecting records, sorting them first when a key is given."""
        items = list(records)
        if sort_key is not None:
            items.sort(key=sort_key)
        table = cls(columns=tuple(columns))
        for item in items:
            table.add_row(project(item))
        return table
