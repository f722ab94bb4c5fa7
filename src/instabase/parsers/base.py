from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from instabase.model import Table

class SchemaParser(ABC):
    @abstractmethod
    def can_parse(self, path: Path) -> bool: ...
    @abstractmethod
    def parse(self, text: str) -> list[Table]: ...
