"""
D2 다이어그램 표기(간이 버전) → Table 목록.

  Users: {
    shape: sql_table
    id: int
    email: text
  }

- `shape: sql_table` 지시어가 있는 블록만 테이블로 인정한다.
- 나머지 `key: value` 줄은 선언 순서대로 컬럼이 된다.
- 잘못된 입력은 예외 없이 버린다(편집 중인 텍스트를 매 키 입력마다 다시 파싱하므로).
"""
from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Iterator, Literal

from instabase.model import Column, Table
from instabase.parsers.base import SchemaParser

logger = logging.getLogger(__name__)

ScanMode = Literal["regex", "balanced"]

# 본문은 첫 '{' 부터 다음 '}' 까지 (중첩 미지원: 안쪽 '}'에서 잘림)
# 식별자는 ASCII 단어 문자, 공백(\s)은 유니코드 전체 (NBSP 포함)
BLOCK_RE = re.compile(r"([A-Za-z0-9_]+)\s*:\s*\{([^}]+)\}")
BLOCK_HEAD_RE = re.compile(r"([A-Za-z0-9_]+)\s*:\s*\{")
LINE_SPLIT_RE = re.compile(r"[\n;]")

DIRECTIVE_KEY = "shape"
DIRECTIVE_VALUE = "sql_table"


def _regex_blocks(text: str) -> Iterator[tuple[str, str]]:
    for m in BLOCK_RE.finditer(text):
        yield m.group(1), m.group(2)


def _balanced_blocks(text: str) -> Iterator[tuple[str, str]]:
    """
    괄호 깊이를 추적하는 스캐너.
    중첩 블록을 포함한 최상위 블록은 잘라내지 않고 통째로 버린다.
    """
    pos = 0
    n = len(text)
    while True:
        m = BLOCK_HEAD_RE.search(text, pos)
        if not m:
            return
        name = m.group(1)
        depth = 1
        nested = False
        i = m.end()
        while i < n and depth:
            ch = text[i]
            if ch == "{":
                depth += 1
                nested = True
            elif ch == "}":
                depth -= 1
            i += 1

        if depth:
            logger.debug("unterminated block %r dropped", name)
            return

        body = text[m.end():i - 1]
        if nested:
            logger.debug("nested block %r rejected", name)
        elif body:
            yield name, body
        pos = i


def _split_line(line: str) -> tuple[str, str] | None:
    parts = [s.strip() for s in line.split(":")]
    if len(parts) < 2:
        return None
    return parts[0], ":".join(parts[1:]).strip()


def _parse_block(name: str, body: str) -> Table | None:
    lines = [l.strip() for l in LINE_SPLIT_RE.split(body)]
    is_sql_table = False
    columns: list[Column] = []

    for line in lines:
        if not line:
            continue
        kv = _split_line(line)
        if kv is None:
            continue
        key, value = kv
        if key == DIRECTIVE_KEY and value == DIRECTIVE_VALUE:
            is_sql_table = True
        elif key and value:
            columns.append(Column(name=key, type=value))

    if not is_sql_table:
        logger.debug("block %r has no `shape: sql_table`, skipped", name)
        return None
    return Table(name=name, columns=tuple(columns))


def parse_d2(text: str, scan_mode: ScanMode = "regex") -> list[Table]:
    """
    텍스트에서 sql_table 블록을 등장 순서대로 추출한다.
    같은 이름의 테이블도 병합하지 않고 각각 반환한다(정책은 normalize 참고).
    """
    if not text:
        return []
    blocks = _balanced_blocks(text) if scan_mode == "balanced" else _regex_blocks(text)

    tables: list[Table] = []
    for name, body in blocks:
        table = _parse_block(name, body)
        if table is not None:
            tables.append(table)
    return tables


class D2Parser(SchemaParser):
    def __init__(self, scan_mode: ScanMode = "regex"):
        self.scan_mode = scan_mode

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() == ".d2"

    def parse(self, text: str) -> list[Table]:
        return parse_d2(text, scan_mode=self.scan_mode)
