from fastapi import APIRouter

from cashflow.dependencies import ChatServiceDep, CurrentUserId, InsightsServiceDep
from cashflow.insights.schemas import ChatRequest, ChatResponse, InsightsResponse

router = APIRouter()
chat_router = APIRouter()


@router.get("/", response_model=InsightsResponse)
async def get_insights(
    service: InsightsServiceDep,
    user_id: CurrentUserId,
) -> InsightsResponse:
    return await service.generate(user_id)


@chat_router.post("/", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    service: ChatServiceDep,
    user_id: CurrentUserId,
) -> ChatResponse:
    return await service.reply(user_id, request.message)
