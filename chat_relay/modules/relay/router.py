from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from chat_relay.modules.relay.exceptions import InvalidInputError
from chat_relay.modules.relay.schemas import ChatReply, ChatRequest, ErrorResponse
from chat_relay.modules.relay.service import RelayService, relay_service

router = APIRouter()


def get_relay_service() -> RelayService:
    return relay_service


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: Request, service: RelayService = Depends(get_relay_service)
) -> ChatReply:
    # Parsed by hand so shape errors map to 400 instead of FastAPI's 422.
    try:
        body = ChatRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        raise InvalidInputError() from exc
    return await service.relay(body.messages)
