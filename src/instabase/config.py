from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    output_dir: Path = Field(default=Path("./out"), alias="INSTABASE_OUTPUT_DIR")
    embedding_dim: int = Field(default=768, gt=0, alias="INSTABASE_EMBEDDING_DIM")

    scan_mode: Literal["regex", "balanced"] = Field(default="regex", alias="INSTABASE_SCAN_MODE")
    duplicate_policy: Literal["keep", "first", "merge"] = Field(default="keep", alias="INSTABASE_DUPLICATE_POLICY")

    watch_debounce: float = Field(default=0.8, ge=0, alias="INSTABASE_WATCH_DEBOUNCE")

settings = Settings()
