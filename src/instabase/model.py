from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

@dataclass(frozen=True)
class Column:
    name: str
    type: str

@dataclass(frozen=True)
class Table:
    name: str
    columns: Tuple[Column, ...] = field(default_factory=tuple)

    def with_columns(self, extra: Tuple[Column, ...]) -> Table:
        return Table(name=self.name, columns=self.columns + tuple(extra))
