from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cashflow.analytics.router import dashboard_router
from cashflow.analytics.router import router as analytics_router
from cashflow.auth_router import router as auth_router
from cashflow.config import settings
from cashflow.database import check_health, close_database, connect_database
from cashflow.dependencies import DBConn
from cashflow.exception_handlers import register_exception_handlers
from cashflow.insights.router import chat_router
from cashflow.insights.router import router as insights_router
from cashflow.llm.factory import LLMFactory
from cashflow.logging_config import setup_logging
from cashflow.notifications.log_sender import LogNotificationSender
from cashflow.transactions.router import router as transactions_router
from cashflow.uploads.log_storage import LogObjectStorage
from cashflow.uploads.router import router as uploads_router
from cashflow.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    app.state.db = await connect_database(settings.db_path)
    app.state.notification_sender = LogNotificationSender()
    app.state.object_storage = LogObjectStorage(settings.upload_base_url)
    app.state.llm = LLMFactory.create_optional()
    yield
    await close_database(app.state.db)
    app.state.db = None


app = FastAPI(
    title="CashFlow",
    description="Income and expense tracking with period analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(users_router, prefix="/api/v1/users", tags=["users"])
app.include_router(transactions_router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(analytics_router, prefix="/api/v1/analytics", tags=["analytics"])
app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
app.include_router(insights_router, prefix="/api/v1/insights", tags=["insights"])
app.include_router(chat_router, prefix="/api/v1/chat", tags=["chat"])
app.include_router(uploads_router, prefix="/api/v1/uploads", tags=["uploads"])


@app.get("/api/v1/health")
async def health(db: DBConn):
    await check_health(db)
    return {"status": "healthy"}
