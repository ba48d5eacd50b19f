from fastapi import APIRouter, Query

from cashflow.dependencies import AnalyticsServiceDep, CurrentUserId, TransactionServiceDep
from cashflow.transactions.models import TransactionType
from cashflow.transactions.schemas import (
    PeriodSummaryResponse,
    TransactionCreate,
    TransactionCreated,
    TransactionDeleted,
    TransactionFilter,
    TransactionResponse,
)

router = APIRouter()


@router.post("/", status_code=201, response_model=TransactionCreated)
async def create_transaction(
    data: TransactionCreate,
    service: TransactionServiceDep,
    user_id: CurrentUserId,
) -> TransactionCreated:
    return await service.create(user_id, data)


@router.get("/", response_model=list[TransactionResponse])
async def list_transactions(
    service: TransactionServiceDep,
    user_id: CurrentUserId,
    category: str | None = None,
    txn_type: TransactionType | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[TransactionResponse]:
    filters = TransactionFilter(
        category=category,
        type=txn_type,
        limit=limit,
        offset=offset,
    )
    return await service.list_transactions(user_id, filters)


@router.get("/period/{period}", response_model=PeriodSummaryResponse)
async def get_transactions_by_period(
    period: str,
    service: AnalyticsServiceDep,
    user_id: CurrentUserId,
) -> PeriodSummaryResponse:
    return await service.period_summary(user_id, period)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    service: TransactionServiceDep,
    user_id: CurrentUserId,
) -> TransactionResponse:
    return await service.get_by_id(user_id, transaction_id)


@router.delete("/{transaction_id}", response_model=TransactionDeleted)
async def delete_transaction(
    transaction_id: str,
    service: TransactionServiceDep,
    user_id: CurrentUserId,
) -> TransactionDeleted:
    return await service.delete(user_id, transaction_id)
