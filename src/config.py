from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # System
    LOG_LEVEL: str = "INFO"
    DATA_DIR: Path = Path("./data")
    LOG_TO_FILE: bool = True  # Vercel/Lambda style hosts have a read-only filesystem
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8001

    # Notion credentials (checked per request, not at load time)
    NOTION_TOKEN: str | None = None
    NOTION_DATABASE_ID: str | None = None

    # Notion transport
    NOTION_BASE_URL: str = "https://api.notion.com"  # client appends /v1
    NOTION_VERSION: str = "2022-06-28"
    NOTION_TIMEOUT: float = 60.0

    # Database schema - must match the property names in the Notion database exactly
    NOTION_TITLE_PROPERTY: str = "Inspiration"
    NOTION_STATUS_PROPERTY: str = "Status"
    NOTION_PRIORITY_PROPERTY: str = "Priority"
    NOTION_ADVICE_PROPERTY: str = "AI Suggestion"
    STATUS_PENDING: str = "pending"
    STATUS_PROCESSED: str = "processed"
    TITLE_MAX_LENGTH: int = 100

    # Priority contract (pass-through unless strict)
    STRICT_PRIORITY: bool = False
    ALLOWED_PRIORITIES: List[str] = ["high", "medium", "low", "高", "中", "低"]

    def missing_notion_settings(self) -> List[str]:
        missing = []
        if not self.NOTION_TOKEN:
            missing.append("NOTION_TOKEN")
        if not self.NOTION_DATABASE_ID:
            missing.append("NOTION_DATABASE_ID")
        return missing

    @property
    def notion_configured(self) -> bool:
        return not self.missing_notion_settings()

    def ensure_dirs(self):
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)

settings = Settings()
