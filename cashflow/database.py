import aiosqlite
import structlog

logger = structlog.get_logger()

DDL_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS users (
        user_id TEXT PRIMARY KEY,
        email TEXT NOT NULL,
        name TEXT,
        phone_number TEXT,
        currency TEXT NOT NULL DEFAULT 'USD',
        business_name TEXT,
        business_type TEXT,
        business_location TEXT,
        team_size INTEGER NOT NULL DEFAULT 1,
        financial_goals TEXT NOT NULL DEFAULT '[]',
        expected_monthly_income_minor INTEGER NOT NULL DEFAULT 0,
        expected_monthly_expense_minor INTEGER NOT NULL DEFAULT 0,
        notification_preference TEXT NOT NULL DEFAULT 'email',
        starting_balance_minor INTEGER NOT NULL DEFAULT 0,
        current_balance_minor INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL REFERENCES users(user_id),
        type TEXT NOT NULL,
        amount_minor INTEGER NOT NULL CHECK (amount_minor >= 0),
        category TEXT NOT NULL,
        description TEXT,
        date TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_transactions_user_date
    ON transactions (user_id, date)
    """,
    """
    CREATE TABLE IF NOT EXISTS file_uploads (
        file_id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        original_name TEXT NOT NULL,
        file_name TEXT NOT NULL,
        storage_key TEXT NOT NULL,
        file_type TEXT NOT NULL CHECK (file_type IN ('pdf', 'csv')),
        file_size INTEGER,
        status TEXT NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'uploaded', 'processed', 'failed')),
        metadata TEXT NOT NULL DEFAULT '{}',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_file_uploads_user_created
    ON file_uploads (user_id, created_at)
    """,
]


async def connect_database(path: str) -> aiosqlite.Connection:
    db = await aiosqlite.connect(path)
    db.row_factory = aiosqlite.Row
    if path != ":memory:":
        await db.execute("PRAGMA journal_mode=WAL")
    await db.execute("PRAGMA foreign_keys=ON")

    for ddl in DDL_STATEMENTS:
        await db.execute(ddl)
    await db.commit()

    logger.info("database_initialized", path=path)
    return db


async def close_database(db: aiosqlite.Connection) -> None:
    await db.close()
    logger.info("database_closed")


async def check_health(db: aiosqlite.Connection) -> None:
    cursor = await db.execute("SELECT 1")
    await cursor.close()
