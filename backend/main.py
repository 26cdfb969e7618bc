from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from db.database import close_pool, create_pool, init_schema
from fastapi.middleware.cors import CORSMiddleware
from routers import (
    calendar_router,
    booking_router,
    admin_router,
)
from services.google_calendar_service import create_calendar_client
from services.mail_service import create_mailer
from dotenv import load_dotenv
import httpx
import os

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db_pool = None
    app.state.http_client = None
    app.state.calendar_client = None
    app.state.mailer = None
    try:
        app.state.db_pool = await create_pool()
        await init_schema(app.state.db_pool)
        app.state.http_client = httpx.AsyncClient(timeout=10.0)
        app.state.calendar_client = create_calendar_client(app.state.http_client)
        app.state.mailer = create_mailer()
    except Exception as e:
        print(f"Service startup failed: {e}")
    try:
        yield
    finally:
        if app.state.db_pool:
            await close_pool(app.state.db_pool)
            app.state.db_pool = None
        if app.state.http_client:
            await app.state.http_client.aclose()
            app.state.http_client = None
        app.state.calendar_client = None
        app.state.mailer = None


app = FastAPI(title="Pixel Studio Calendar API", lifespan=lifespan)

origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    print(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Missing required fields"},
    )


app.include_router(calendar_router.router)
app.include_router(booking_router.router)
app.include_router(admin_router.router)


@app.get("/api/health")
async def check_health(request: Request):
    timestamp = datetime.now(timezone.utc).isoformat()
    state = request.app.state
    if (
        not getattr(state, "db_pool", None)
        or not getattr(state, "http_client", None)
        or not getattr(state, "calendar_client", None)
    ):
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Pixel Studio Calendar API is degraded",
                "timestamp": timestamp,
            },
        )
    return {
        "success": True,
        "message": "Pixel Studio Calendar API is running",
        "timestamp": timestamp,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
