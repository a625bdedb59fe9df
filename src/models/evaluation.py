from pydantic import BaseModel, Field
from typing import Optional

class EvaluationRequest(BaseModel):
    """One agent evaluation, as posted by the Dify function call."""
    inspiration_content: str # raw idea text
    priority_result: str # high / medium / low (not enforced unless STRICT_PRIORITY)
    suggestion_detail: str # concrete next-step advice

class SuccessResponse(BaseModel):
    status: str = "success"
    message: str
    priority: str

class ErrorResponse(BaseModel):
    status: str = "error"
    message: str
    details: Optional[str] = None
    notion_item_id: Optional[str] = Field(default=None, serialization_alias="notionItemId")
