"""
Assist API Route

Single endpoint accepting any tagged capability request.
"""
from fastapi import APIRouter, Depends

from suitcase.dependencies import get_assistant
from suitcase.schemas.reader import AssistRequest, AssistResponse
from suitcase.services.ai.assistant import ReadingAssistant


router = APIRouter()


@router.post("/assist", response_model=AssistResponse)
async def assist(
    body: AssistRequest,
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """
    通用能力调用

    请求体的 kind 字段决定调用哪个能力，例如:
        {"kind": "summary", "title": "Dune"}
    """
    request = body.root
    result = await assistant.handle(request)
    return AssistResponse(kind=request.kind, result=result)
