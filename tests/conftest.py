import pytest

from instabase.config import settings


USERS_POSTS = """Users: {
  shape: sql_table
  id: int
  email: text
  created_at: timestamp
}

Posts: {
  shape: sql_table
  id: int
  title: text
  content: text
  user_id: int
}"""


@pytest.fixture
def users_posts_d2() -> str:
    return USERS_POSTS


@pytest.fixture
def schema_file(tmp_path, users_posts_d2):
    p = tmp_path / "app.d2"
    p.write_text(users_posts_d2, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def default_settings(monkeypatch, tmp_path):
    """Tests never depend on a developer's .env / INSTABASE_* environment."""
    monkeypatch.setattr(settings, "output_dir", tmp_path / "out")
    monkeypatch.setattr(settings, "embedding_dim", 768)
    monkeypatch.setattr(settings, "scan_mode", "regex")
    monkeypatch.setattr(settings, "duplicate_policy", "keep")
    monkeypatch.setattr(settings, "watch_debounce", 0.8)
