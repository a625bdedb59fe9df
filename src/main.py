import sys
import uvicorn
from src.config import settings
from src.services.logger import logger

def main():
    try:
        # log_config=None keeps uvicorn on the loguru handlers from setup_logging
        uvicorn.run("src.api:app", host=settings.API_HOST, port=settings.API_PORT, log_config=None)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
