import json
from contextlib import asynccontextmanager
from typing import Any
from fastapi import FastAPI, Request, Depends
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import settings, Settings
from src.models.evaluation import SuccessResponse, ErrorResponse
from src.services.logger import logger
from src.services.notion import NotionClient
from src.tools.validator import RequestRejected, check_method, check_configuration, parse_evaluation
from src.workflows.writer import NotionWriter, ChainError

VERSION = "1.0.0"
WRITE_PATH = "/api/write-notion"
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.LOG_TO_FILE:
        settings.ensure_dirs()
    if not settings.notion_configured:
        # Keep serving: every write request will get a 500 until the env is fixed
        logger.error(f"Notion tokens/IDs are missing from environment variables: {settings.missing_notion_settings()}")
    yield

# No CORS middleware: the agent calls server-to-server, and a preflight OPTIONS must get the 405 below
app = FastAPI(title="Evaluation to Notion Bridge", lifespan=lifespan)

@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # Methods outside ALL_METHODS (TRACE, custom verbs) are refused by the router itself
    if exc.status_code == 405 and request.url.path == WRITE_PATH:
        logger.warning(f"Rejected {request.method} request")
        return JSONResponse(status_code=405, content={"message": "Method Not Allowed"})
    return await http_exception_handler(request, exc)

def get_settings() -> Settings:
    return settings

async def get_notion_client(cfg: Settings = Depends(get_settings)):
    async with NotionClient.from_settings(cfg) as client:
        yield client

def _reject_constant(name: str):
    # json.loads accepts NaN/Infinity, which the JSON response renderer refuses to echo back
    raise ValueError(f"Invalid JSON constant: {name}")

async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        # Echo whatever was sent so the caller can see it in the 400
        return raw.decode("utf-8", errors="replace")

@app.get("/api/status")
async def get_status():
    return {"status": "ok", "version": VERSION}

@app.api_route(WRITE_PATH, methods=ALL_METHODS)
async def write_notion(
    request: Request,
    cfg: Settings = Depends(get_settings),
    client: NotionClient = Depends(get_notion_client),
):
    try:
        check_method(request.method)
        check_configuration(cfg)
        evaluation = parse_evaluation(await _read_body(request), cfg)
    except RequestRejected as e:
        return JSONResponse(status_code=e.status_code, content=e.body)

    writer = NotionWriter(client, cfg)
    try:
        page_id = await writer.write(evaluation)
    except ChainError as e:
        logger.error(f"Notion chain failed at {e.stage} (page={e.record_id}): {e.details}")
        body = ErrorResponse(
            message="Failed to complete Notion chain operation.",
            details=e.details,
            notion_item_id=e.record_id,
        )
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))

    body = SuccessResponse(
        message=f"Notion page {page_id} created and updated successfully.",
        priority=evaluation.priority_result,
    )
    return JSONResponse(status_code=200, content=body.model_dump())
