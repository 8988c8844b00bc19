"""POST /api/ai/chat - conversational assistant over the ledger figures"""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from business_ledger.api.dependencies import get_assistant_service, get_ledger_service
from business_ledger.api.responses import send_response
from business_ledger.api.routes.schemas import ChatRequest, ChatReply
from business_ledger.services.assistant import AssistantService
from business_ledger.services.ledger import LedgerService

router = APIRouter()


@router.post("/ai/chat")
async def chat(
    request_body: ChatRequest,
    assistant: AssistantService = Depends(get_assistant_service),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Answer a question about the business.

    When the caller's context has no metrics, the current ledger figures
    are filled in. Remote failures fall back to a scripted reply, so this
    endpoint only fails on bad input.
    """
    if request_body.messages is None:
        return send_response(400, False, None, "Messages array is required")

    context = dict(request_body.context or {})
    if "metrics" not in context:
        context = {**(await run_in_threadpool(ledger.assistant_context)), **context}

    messages = [m.model_dump() for m in request_body.messages]
    result = await assistant.generate_reply(messages, context)

    return send_response(200, True, ChatReply(reply=result.reply, mode=result.mode))
