from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List

@dataclass
class ScanConfig:
    exts: tuple[str, ...] = (".d2",)
    skip_dirs: tuple[str, ...] = (".git", "node_modules", ".venv", "__pycache__")

def _skipped(f: Path, root: Path, cfg: ScanConfig) -> bool:
    return any(part in cfg.skip_dirs for part in f.relative_to(root).parts[:-1])

def scan_schema_files(path: Path, cfg: ScanConfig | None = None) -> List[Path]:
    """
    스키마(.d2) 파일 목록을 반환한다.
    - 파일이면 확장자와 무관하게 그 파일 하나
    - 디렉터리면 하위 전체에서 확장자가 맞는 파일 (정렬)
    """
    cfg = cfg or ScanConfig()
    if path.is_file():
        return [path]

    candidates: set[Path] = set()
    for f in path.rglob("*"):
        if not f.is_file() or f.suffix.lower() not in cfg.exts:
            continue
        if _skipped(f, path, cfg):
            continue
        candidates.add(f)
    return sorted(candidates)
