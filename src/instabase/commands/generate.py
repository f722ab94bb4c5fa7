"""스키마 문서 생성: .d2 스캔 → 파싱 → SQL + 미리보기 MD + 프롬프트."""
from __future__ import annotations
from pathlib import Path
from typing import Mapping, Optional

from rich.console import Console

from instabase.config import settings
from instabase.normalize import normalize_tables
from instabase.parsers.d2 import D2Parser
from instabase.scanner import scan_schema_files
from instabase.sql_writer import generate_sql, write_sql
from instabase.docs_writer import write_summary_md
from instabase.prompt_writer import write_prompt

console = Console()


def load_text(p: Path) -> str:
    return p.read_text(encoding="utf-8", errors="ignore")


def run_generate(
    path: str | Path,
    out_dir: Path | None = None,
    vector_flags: Optional[Mapping[str, bool]] = None,
    out_sql: str = "schema.sql",
    out_md: str = "schema_preview.md",
    out_prompt: str = "prompt.md",
) -> list[tuple[Path, Path, Path]]:
    """
    파일 또는 디렉터리의 .d2 스키마마다 <out_dir>/<파일명>/ 아래에 결과를 쓴다.
    디렉터리 입력은 하위 경로를 유지한다 (a/schema.d2 → <out_dir>/a/schema/).
    반환: [(sql_path, md_path, prompt_path), ...]
    """
    src = Path(path).expanduser()
    if not src.exists():
        raise FileNotFoundError(f"schema path not found: {src}")

    base = out_dir or settings.output_dir
    parser = D2Parser(scan_mode=settings.scan_mode)
    dim = settings.embedding_dim

    schema_files = [f for f in scan_schema_files(src) if src.is_file() or parser.can_parse(f)]
    console.print(f"Found [green]{len(schema_files)}[/green] schema files")

    written: list[tuple[Path, Path, Path]] = []
    for f in schema_files:
        tables = normalize_tables(parser.parse(load_text(f)), settings.duplicate_policy)
        target = base / (f.stem if src.is_file() else f.relative_to(src).with_suffix(""))
        sql = generate_sql(tables, vector_flags, embedding_dim=dim)

        sql_path = write_sql(tables, vector_flags, target / out_sql, embedding_dim=dim)
        md_path = write_summary_md(tables, vector_flags, target / out_md, embedding_dim=dim)
        prompt_path = write_prompt(sql, target / out_prompt)

        console.print(f"[bold]{f.name}[/bold]: {len(tables)} tables")
        console.print(f"[bold green]SQL:[/bold green]    {sql_path}")
        console.print(f"[bold green]MD:[/bold green]     {md_path}")
        console.print(f"[bold green]Prompt:[/bold green] {prompt_path}")
        written.append((sql_path, md_path, prompt_path))
    return written
