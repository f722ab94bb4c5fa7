"""미리보기 렌더러용 테이블 모델 (JSON)."""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Mapping, Optional, Sequence

from instabase.model import Table


class ColumnModel(BaseModel):
    name: str
    type: str


class TableModel(BaseModel):
    name: str
    columns: List[ColumnModel] = Field(default_factory=list)
    vector_search: bool = False


class ParsedSchema(BaseModel):
    tables: List[TableModel] = Field(default_factory=list)


def to_schema_model(tables: Sequence[Table], vector_flags: Optional[Mapping[str, bool]] = None) -> ParsedSchema:
    flags = vector_flags or {}
    return ParsedSchema(
        tables=[
            TableModel(
                name=t.name,
                columns=[ColumnModel(name=c.name, type=c.type) for c in t.columns],
                vector_search=bool(flags.get(t.name)),
            )
            for t in tables
        ]
    )


def tables_to_json(tables: Sequence[Table], vector_flags: Optional[Mapping[str, bool]] = None) -> str:
    return to_schema_model(tables, vector_flags).model_dump_json(indent=2)
