from __future__ import annotations
from pathlib import Path
from typing import Mapping, Optional, Sequence
from instabase.model import Table
from instabase.sql_writer import EMBEDDING_COLUMN, EMBEDDING_DIM, embedding_type

def to_markdown(
    tables: Sequence[Table],
    vector_flags: Optional[Mapping[str, bool]] = None,
    embedding_dim: int = EMBEDDING_DIM,
) -> str:
    flags = vector_flags or {}
    lines = []
    lines.append("# Schema Preview\n")
    lines.append(f"- Tables: {len(tables)}")
    lines.append(f"- Vector search: {sum(1 for t in tables if flags.get(t.name))}\n")

    if not tables:
        lines.append("No valid tables defined.")
        lines.append("")
        return "\n".join(lines)

    for table in tables:
        lines.append(f"## {table.name}")
        for col in table.columns:
            lines.append(f"- `{col.name}`: {col.type.upper()}")
        if flags.get(table.name):
            lines.append(f"- `{EMBEDDING_COLUMN}`: {embedding_type(embedding_dim)} (vector)")
        lines.append("")

    return "\n".join(lines)

def write_summary_md(
    tables: Sequence[Table],
    vector_flags: Optional[Mapping[str, bool]],
    out_path: Path,
    embedding_dim: int = EMBEDDING_DIM,
) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_markdown(tables, vector_flags, embedding_dim), encoding="utf-8")
    return out_path
