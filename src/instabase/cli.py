"""
스키마 변환 CLI.
- instabase sql      : D2 → SQL 출력
- instabase prompt   : SQL을 감싼 코드 생성 프롬프트 출력
- instabase preview  : 파싱된 테이블 미리보기 (Rich 표 / JSON)
- instabase generate : 파일/디렉터리 → SQL + 미리보기 MD + 프롬프트 파일
- instabase watch    : generate 후 .d2 변경 시마다 재생성
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table as RichTable

from instabase.config import settings
from instabase.model import Table
from instabase.normalize import normalize_tables
from instabase.parsers.d2 import parse_d2
from instabase.sql_writer import EMBEDDING_COLUMN, generate_sql, write_sql, embedding_type
from instabase.prompt_writer import build_prompt
from instabase.schema_models import tables_to_json
from instabase.commands.generate import run_generate

console = Console()

app = typer.Typer(
    name="instabase",
    add_completion=False,
    help="D2 스키마(shape: sql_table) → SQLite DDL 변환 도구",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그 출력"),
):
    if verbose:
        log = logging.getLogger("instabase")
        log.setLevel(logging.DEBUG)
        if not log.handlers:
            log.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def _schema_arg() -> str:
    return typer.Argument(..., help="D2 스키마 파일 경로 ('-' 이면 stdin)")


def _vector_opt() -> Optional[List[str]]:
    return typer.Option(None, "--vector", help="embedding 컬럼을 붙일 테이블 (여러 번 지정 가능)")


def _vector_flags(vector: Optional[List[str]]) -> dict[str, bool]:
    return {name: True for name in (vector or [])}


def _read_schema(schema: str) -> str:
    if schema == "-":
        return sys.stdin.read()
    p = Path(schema).expanduser()
    if not p.is_file():
        raise typer.BadParameter(f"스키마 파일이 없습니다: {schema}", param_hint="SCHEMA")
    return p.read_text(encoding="utf-8", errors="ignore")


def _load_tables(schema: str) -> list[Table]:
    tables = parse_d2(_read_schema(schema), scan_mode=settings.scan_mode)
    return normalize_tables(tables, settings.duplicate_policy)


@app.command("sql")
def cmd_sql(
    schema: str = _schema_arg(),
    vector: Optional[List[str]] = _vector_opt(),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="출력 SQL 파일 (없으면 stdout)"),
):
    """D2 스키마를 CREATE TABLE 문으로 변환."""
    tables = _load_tables(schema)
    flags = _vector_flags(vector)
    if out is None:
        typer.echo(generate_sql(tables, flags, embedding_dim=settings.embedding_dim))
        return
    write_sql(tables, flags, out, embedding_dim=settings.embedding_dim)
    console.print(f"[bold green]SQL:[/bold green] {out}")


@app.command("prompt")
def cmd_prompt(
    schema: str = _schema_arg(),
    vector: Optional[List[str]] = _vector_opt(),
):
    """생성된 SQL을 코드 블록으로 감싼 어시스턴트용 프롬프트 출력."""
    tables = _load_tables(schema)
    typer.echo(build_prompt(generate_sql(tables, _vector_flags(vector), embedding_dim=settings.embedding_dim)))


@app.command("preview")
def cmd_preview(
    schema: str = _schema_arg(),
    vector: Optional[List[str]] = _vector_opt(),
    as_json: bool = typer.Option(False, "--json", help="JSON으로 출력"),
):
    """파싱된 테이블 미리보기."""
    tables = _load_tables(schema)
    flags = _vector_flags(vector)
    if as_json:
        typer.echo(tables_to_json(tables, flags))
        return

    if not tables:
        console.print("[yellow]No valid tables defined.[/yellow]")
        return

    for t in tables:
        view = RichTable(title=t.name, title_justify="left")
        view.add_column("column")
        view.add_column("type", style="blue")
        for c in t.columns:
            view.add_row(c.name, c.type.upper())
        if flags.get(t.name):
            view.add_row(f"[magenta]{EMBEDDING_COLUMN}[/magenta]", f"[magenta]{embedding_type(settings.embedding_dim)}[/magenta]")
        console.print(view)


@app.command("generate")
def cmd_generate(
    path: Path = typer.Argument(..., help="D2 파일 또는 디렉터리"),
    vector: Optional[List[str]] = _vector_opt(),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="출력 디렉터리 (기본: INSTABASE_OUTPUT_DIR)"),
):
    """SQL + 미리보기 MD + 프롬프트 파일 생성."""
    if not path.exists():
        raise typer.BadParameter(f"경로가 없습니다: {path}", param_hint="PATH")
    run_generate(path, out_dir=out_dir, vector_flags=_vector_flags(vector))
    console.print(f"[bold green]Done. Output under[/bold green] {out_dir or settings.output_dir}")


@app.command("watch")
def cmd_watch(
    path: Path = typer.Argument(..., help="D2 파일 또는 디렉터리"),
    vector: Optional[List[str]] = _vector_opt(),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="출력 디렉터리 (기본: INSTABASE_OUTPUT_DIR)"),
):
    """generate 후 스키마가 바뀔 때마다 다시 생성."""
    if not path.exists():
        raise typer.BadParameter(f"watch는 로컬 경로에서 사용하세요: {path}", param_hint="PATH")
    from instabase.watch import watch_schema
    watch_schema(path, out_dir=out_dir, vector_flags=_vector_flags(vector))


if __name__ == "__main__":
    app()
