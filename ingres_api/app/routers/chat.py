from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ingres_api.app.deps import get_chat_service
from ingres_api.app.exceptions import InvalidRequest
from ingres_api.app.schemas.chat import ChatRequest, ChatResponse
from ingres_api.app.services.chat_service import ChatService

router = APIRouter()


async def parse_chat_request(request: Request) -> ChatRequest:
    body = await request.body()
    try:
        return ChatRequest.model_validate_json(body or b"{}")
    except ValidationError as e:
        raise InvalidRequest() from e


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest = Depends(parse_chat_request),
               service: ChatService = Depends(get_chat_service)):
    return await run_in_threadpool(service.answer, req)
