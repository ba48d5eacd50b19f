"""FastAPI dependency wiring.

Long-lived clients (database connection, chat model, notification sender,
object storage) are built once in the application lifespan and kept on
``app.state``; repositories and services are cheap per-request wrappers around them.
"""

from typing import Annotated

import aiosqlite
from fastapi import Depends, Request
from langchain_core.language_models import BaseChatModel

from cashflow.analytics.service import AnalyticsService
from cashflow.auth import get_current_user_id
from cashflow.config import settings
from cashflow.insights.service import ChatService, InsightsService
from cashflow.notifications.base import NotificationSender
from cashflow.notifications.service import NotificationService
from cashflow.transactions.repository import TransactionRepository
from cashflow.transactions.service import TransactionService
from cashflow.uploads.repository import UploadRepository
from cashflow.uploads.service import UploadService
from cashflow.uploads.storage import ObjectStorage
from cashflow.users.repository import UserRepository
from cashflow.users.service import UserService


def get_db(request: Request) -> aiosqlite.Connection:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized. Is the application lifespan running?")
    return db


def get_llm(request: Request) -> BaseChatModel | None:
    return getattr(request.app.state, "llm", None)


def get_notification_sender(request: Request) -> NotificationSender:
    return request.app.state.notification_sender


def get_object_storage(request: Request) -> ObjectStorage:
    return request.app.state.object_storage


DBConn = Annotated[aiosqlite.Connection, Depends(get_db)]
LLMDep = Annotated[BaseChatModel | None, Depends(get_llm)]
NotificationSenderDep = Annotated[NotificationSender, Depends(get_notification_sender)]
ObjectStorageDep = Annotated[ObjectStorage, Depends(get_object_storage)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]


def get_transaction_repo(db: DBConn) -> TransactionRepository:
    return TransactionRepository(db)


def get_user_repo(db: DBConn) -> UserRepository:
    return UserRepository(db)


TransactionRepoDep = Annotated[TransactionRepository, Depends(get_transaction_repo)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]


def get_notification_service(sender: NotificationSenderDep) -> NotificationService:
    return NotificationService(sender, threshold=settings.expense_alert_threshold)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_user_service(users: UserRepoDep) -> UserService:
    return UserService(users)


def get_transaction_service(
    repo: TransactionRepoDep,
    users: UserRepoDep,
    notifications: NotificationServiceDep,
) -> TransactionService:
    return TransactionService(repo, users, notifications)


def get_analytics_service(repo: TransactionRepoDep, users: UserRepoDep) -> AnalyticsService:
    return AnalyticsService(repo, users)


def get_insights_service(repo: TransactionRepoDep, users: UserRepoDep, llm: LLMDep) -> InsightsService:
    return InsightsService(repo, users, llm)


def get_chat_service(repo: TransactionRepoDep, users: UserRepoDep, llm: LLMDep) -> ChatService:
    return ChatService(repo, users, llm)


def get_upload_service(db: DBConn, storage: ObjectStorageDep) -> UploadService:
    return UploadService(UploadRepository(db), storage, url_ttl_seconds=settings.upload_url_ttl_seconds)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
InsightsServiceDep = Annotated[InsightsService, Depends(get_insights_service)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
