from __future__ import annotations
from pathlib import Path
from typing import Mapping, Optional, Sequence
from instabase.model import Column, Table

EMBEDDING_COLUMN = "embedding"
EMBEDDING_DIM = 768

EMPTY_SCHEMA_SQL = "-- No valid tables found.\n-- Use shape: sql_table"

def embedding_type(dim: int = EMBEDDING_DIM) -> str:
    # libSQL(Turso) 벡터 타입: float32 x dim
    return f"F32_BLOB({dim})"

def col_line(c: Column) -> str:
    return f"  {c.name} {c.type.upper()}"

def table_sql(t: Table, vector_search: bool = False, embedding_dim: int = EMBEDDING_DIM) -> str:
    cols = [col_line(c) for c in t.columns]
    if vector_search:
        cols.append(f"  {EMBEDDING_COLUMN} {embedding_type(embedding_dim)}")
    return f"CREATE TABLE {t.name} (\n" + ",\n".join(cols) + "\n);"

def generate_sql(
    tables: Sequence[Table],
    vector_flags: Optional[Mapping[str, bool]] = None,
    embedding_dim: int = EMBEDDING_DIM,
) -> str:
    if not tables:
        return EMPTY_SCHEMA_SQL

    flags = vector_flags or {}
    return "\n\n".join(
        table_sql(t, bool(flags.get(t.name)), embedding_dim)
        for t in tables
    )

def write_sql(
    tables: Sequence[Table],
    vector_flags: Optional[Mapping[str, bool]],
    out_path: Path,
    embedding_dim: int = EMBEDDING_DIM,
) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(generate_sql(tables, vector_flags, embedding_dim) + "\n", encoding="utf-8")
    return out_path
