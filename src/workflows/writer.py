from typing import Any, Dict, List, Optional
from src.config import Settings
from src.models.evaluation import EvaluationRequest
from src.services.notion import NotionClient
from src.services.logger import logger

# Notion rejects a single rich text item longer than this
RICH_TEXT_LIMIT = 2000

class ChainError(Exception):
    """
    Create -> update chain did not finish.
    stage is "create" (nothing written) or "update" (record_id points at an orphaned pending page).
    """

    def __init__(self, stage: str, details: str, record_id: Optional[str] = None):
        super().__init__(details)
        self.stage = stage
        self.details = details
        self.record_id = record_id

def split_rich_text(content: str, limit: int = RICH_TEXT_LIMIT) -> List[Dict[str, Any]]:
    chunks = [content[i:i + limit] for i in range(0, len(content), limit)] or [""]
    return [{"type": "text", "text": {"content": chunk}} for chunk in chunks]

class NotionWriter:
    """
    Two-phase write of an evaluation into the Notion database:
    A) create the page with the (truncated) idea as title, status pending, full idea in the body
    B) update that page with priority, advice and status processed
    No rollback and no retry: a failure in B leaves the pending page behind and reports its id.
    """

    def __init__(self, client: NotionClient, settings: Settings):
        self.client = client
        self.settings = settings

    def build_title(self, content: str) -> str:
        limit = self.settings.TITLE_MAX_LENGTH
        return content[:limit] + ("..." if len(content) > limit else "")

    def build_create_payload(self, evaluation: EvaluationRequest) -> Dict[str, Any]:
        s = self.settings
        return {
            "parent": {"database_id": s.NOTION_DATABASE_ID},
            "properties": {
                s.NOTION_TITLE_PROPERTY: {
                    "title": [{"text": {"content": self.build_title(evaluation.inspiration_content)}}],
                },
                s.NOTION_STATUS_PROPERTY: {"select": {"name": s.STATUS_PENDING}},
            },
            "children": [
                {
                    "object": "block",
                    "type": "paragraph",
                    "paragraph": {"rich_text": split_rich_text(evaluation.inspiration_content)},
                }
            ],
        }

    def build_update_properties(self, evaluation: EvaluationRequest) -> Dict[str, Any]:
        s = self.settings
        return {
            s.NOTION_PRIORITY_PROPERTY: {"select": {"name": evaluation.priority_result}},
            s.NOTION_ADVICE_PROPERTY: {"rich_text": split_rich_text(evaluation.suggestion_detail)},
            s.NOTION_STATUS_PROPERTY: {"select": {"name": s.STATUS_PROCESSED}},
        }

    async def create(self, evaluation: EvaluationRequest) -> str:
        payload = self.build_create_payload(evaluation)
        page = await self.client.create_page(**payload)
        page_id = page["id"]
        logger.info(f"Created Notion page {page_id}")
        return page_id

    async def enrich(self, record_id: str, evaluation: EvaluationRequest):
        await self.client.update_page(record_id, self.build_update_properties(evaluation))
        logger.info(f"Updated Notion page {record_id} with assessment (priority={evaluation.priority_result})")

    async def write(self, evaluation: EvaluationRequest) -> str:
        """Runs phase A then phase B. Returns the page id or raises ChainError."""
        try:
            record_id = await self.create(evaluation)
        except Exception as e:
            logger.error(f"Notion create failed: {e}")
            raise ChainError("create", str(e)) from e

        try:
            await self.enrich(record_id, evaluation)
        except Exception as e:
            logger.error(f"Notion update failed, page {record_id} left as '{self.settings.STATUS_PENDING}': {e}")
            raise ChainError("update", str(e), record_id=record_id) from e

        return record_id
