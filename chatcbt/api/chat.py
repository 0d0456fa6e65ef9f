import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from chatcbt.core.exceptions import ChatCbtError
from chatcbt.core.settings import Settings, get_settings
from chatcbt.dependencies import get_journal_service
from chatcbt.models.chat import (
    CustomPromptRead,
    JournalChatRequest,
    JournalResponse,
    JournalSummaryRequest,
)
from chatcbt.services.journal_service import JournalReply, JournalService

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(reply: JournalReply) -> JournalResponse:
    return JournalResponse(
        response=reply.response,
        append_text=reply.append_text,
        document=reply.document,
        notices=list(reply.notices),
    )


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, ChatCbtError):
        return HTTPException(status_code=e.status_code, detail=e.message)
    if isinstance(e, httpx.HTTPError):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=f"Internal server error: {e}")


@router.post("/chat", response_model=JournalResponse)
async def chat_endpoint(
    request: JournalChatRequest,
    journal_service: JournalService = Depends(get_journal_service),
) -> JournalResponse:
    try:
        reply = await journal_service.respond(
            request.document,
            custom_prompt=request.custom_prompt,
            custom_prompt_id=request.custom_prompt_id,
        )
        return _to_response(reply)
    except Exception as e:
        logger.exception("Chat endpoint failed")
        raise _to_http_error(e)


@router.post("/summarize", response_model=JournalResponse)
async def summarize_endpoint(
    request: JournalSummaryRequest,
    journal_service: JournalService = Depends(get_journal_service),
) -> JournalResponse:
    try:
        reply = await journal_service.respond(request.document, is_summary=True)
        return _to_response(reply)
    except Exception as e:
        logger.exception("Summarize endpoint failed")
        raise _to_http_error(e)


@router.get("/prompts", response_model=list[CustomPromptRead])
def list_custom_prompts(
    settings: Settings = Depends(get_settings),
) -> list[CustomPromptRead]:
    return [CustomPromptRead.model_validate(p.model_dump()) for p in settings.custom_prompts]
