"""SQL → 코드 생성 어시스턴트(Cursor 등)에 붙여넣을 프롬프트."""
from __future__ import annotations
from pathlib import Path

PROMPT_TEMPLATE = """I am building a new application using SQLite.
Here is my database schema:

```sql
{sql}
```

Please generate the TypeScript types and a basic CRUD repository for this schema."""


def build_prompt(sql: str) -> str:
    return PROMPT_TEMPLATE.format(sql=sql)


def write_prompt(sql: str, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(build_prompt(sql) + "\n", encoding="utf-8")
    return out_path
