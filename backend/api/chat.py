"""Chat assistant endpoint."""

from fastapi import APIRouter, Depends

from api.helpers import translate_service_errors
from api.market_data import get_market_data_service
from schemas import ChatRequest, ChatResponse
from services.chat_service import ChatService
from services.market_data_service import MarketDataService

router = APIRouter(prefix="/api/chat", tags=["chat"])


def get_chat_service(
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> ChatService:
    return ChatService(market_data_service=market_data_service)


@router.post("", response_model=ChatResponse)
async def chat(
    data: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """Answer an investing question.

    The reply carries the detected intent, a structured payload for that
    intent and a markdown rendering that ends with the SEBI disclaimer.

    Raises:
        HTTPException: 400 if the message is blank.
    """
    with translate_service_errors():
        result = await service.respond(data.message, data.user_profile)
    return ChatResponse(
        intent=result.intent,
        payload=result.payload,
        formatted=result.formatted,
        disclaimer=result.disclaimer,
        timestamp=result.timestamp,
    )
