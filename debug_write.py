import asyncio
import sys
from src.config import settings
from src.models.evaluation import EvaluationRequest
from src.services.notion import NotionClient
from src.services.logger import logger
from src.workflows.writer import NotionWriter, ChainError

SAMPLE = EvaluationRequest(
    inspiration_content="Build a faster cache",
    priority_result="high",
    suggestion_detail="Prototype an LRU layer",
)

async def main():
    logger.info(f"Debug write against database {settings.NOTION_DATABASE_ID}")
    missing = settings.missing_notion_settings()
    if missing:
        print(f"[FAIL] Missing settings: {', '.join(missing)}")
        return 1

    async with NotionClient.from_settings(settings) as client:
        writer = NotionWriter(client, settings)
        try:
            page_id = await writer.write(SAMPLE)
        except ChainError as e:
            print(f"[FAIL] Chain failed at {e.stage}: {e.details} (page={e.record_id})")
            return 1

    print(f"[OK] Page {page_id} created and updated. Check the database for the new row.")
    return 0

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
