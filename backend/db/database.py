import asyncpg
from dotenv import load_dotenv
import os

load_dotenv()

DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST")
DB_PORT = os.getenv("DB_PORT", 5432)
DB_DATABASE = os.getenv("DB_DATABASE")

DB_URL = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_DATABASE}"

SCHEMA = """
CREATE TABLE IF NOT EXISTS bookings (
    id TEXT PRIMARY KEY,
    date DATE NOT NULL,
    start_time TIMESTAMPTZ NOT NULL,
    end_time TIMESTAMPTZ NOT NULL,
    customer_name TEXT NOT NULL,
    customer_email TEXT NOT NULL,
    customer_phone TEXT NOT NULL,
    duration INTEGER NOT NULL CHECK (duration >= 1),
    shooting_type TEXT,
    message TEXT,
    status TEXT NOT NULL DEFAULT 'confirmed',
    google_event_id TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    CHECK (end_time = start_time + duration * INTERVAL '1 hour')
);
CREATE INDEX IF NOT EXISTS bookings_start_time_idx ON bookings (start_time);

CREATE TABLE IF NOT EXISTS closed_days (
    id SERIAL PRIMARY KEY,
    date DATE NOT NULL,
    reason TEXT,
    type TEXT NOT NULL DEFAULT 'personal'
        CHECK (type IN ('holiday', 'maintenance', 'personal'))
);
CREATE INDEX IF NOT EXISTS closed_days_date_idx ON closed_days (date);
"""


async def create_pool():
    try:
        pool = await asyncpg.create_pool(dsn=DB_URL, min_size=2, max_size=15)
        print("Database connection pool created")
        return pool
    except Exception as e:
        print(f"Could not create connection pool: {e}")
        raise


async def init_schema(pool: asyncpg.Pool):
    async with pool.acquire() as connection:
        await connection.execute(SCHEMA)


async def close_pool(pool: asyncpg.Pool):
    if pool:
        await pool.close()
