from typing import Any, Dict
from src.config import Settings
from src.models.evaluation import EvaluationRequest
from src.services.logger import logger

REQUIRED_FIELDS = ("inspiration_content", "priority_result", "suggestion_detail")

class RequestRejected(Exception):
    """A request refused before any Notion call. Carries the HTTP status and JSON body to return."""

    def __init__(self, status_code: int, body: Dict[str, Any]):
        super().__init__(f"{status_code}: {body}")
        self.status_code = status_code
        self.body = body

def check_method(method: str):
    # Only the agent's POST function call is accepted
    if method.upper() != "POST":
        logger.warning(f"Rejected {method} request")
        raise RequestRejected(405, {"message": "Method Not Allowed"})

def check_configuration(settings: Settings):
    missing = settings.missing_notion_settings()
    if missing:
        logger.error(f"Notion configuration missing: {', '.join(missing)}")
        raise RequestRejected(500, {
            "status": "error",
            "message": "Server configuration error: Notion environment variables not set.",
        })

def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and value != ""

def parse_evaluation(body: Any, settings: Settings) -> EvaluationRequest:
    """
    Checks presence of the three required fields and returns the typed request.
    `body` is echoed back untouched in the 400 response so the agent side can debug its call.
    """
    if not isinstance(body, dict) or not all(_is_filled(body.get(f)) for f in REQUIRED_FIELDS):
        logger.error(f"Missing required fields in request body: {body}")
        raise RequestRejected(400, {
            "error": "Missing required parameters from Dify Agent Function Call.",
            "received": body,
        })

    evaluation = EvaluationRequest(**{f: body[f] for f in REQUIRED_FIELDS})

    if settings.STRICT_PRIORITY and evaluation.priority_result not in settings.ALLOWED_PRIORITIES:
        logger.error(f"Unknown priority label: {evaluation.priority_result!r}")
        raise RequestRejected(400, {
            "error": f"Invalid priority_result '{evaluation.priority_result}'. Allowed: {', '.join(settings.ALLOWED_PRIORITIES)}",
            "received": body,
        })

    return evaluation
