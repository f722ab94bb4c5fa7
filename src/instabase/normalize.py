from __future__ import annotations
from typing import Sequence
from instabase.model import Table

DUPLICATE_POLICIES = ("keep", "first", "merge")

def normalize_tables(tables: Sequence[Table], policy: str = "keep") -> list[Table]:
    """
    같은 이름의 테이블 처리 정책.
    - keep : 그대로 통과 (파서 기본 동작)
    - first: 처음 등장한 것만 남김
    - merge: 뒤에 나온 컬럼을 첫 번째 테이블 뒤에 이어 붙임 (위치는 첫 번째 기준)
    """
    if policy not in DUPLICATE_POLICIES:
        raise ValueError(f"unknown duplicate policy: {policy!r} (expected one of {', '.join(DUPLICATE_POLICIES)})")

    if policy == "keep":
        return list(tables)

    merged: dict[str, Table] = {}
    for t in tables:
        if t.name not in merged:
            merged[t.name] = t
        elif policy == "merge":
            merged[t.name] = merged[t.name].with_columns(t.columns)
    return list(merged.values())
