import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from trainticker import config
from trainticker.api.health import router as health_router
from trainticker.api.trains import router as trains_router
from trainticker.database.db import close_pool, get_pool

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- startup ---
    try:
        pool = await get_pool()
        await pool.fetchval("SELECT 1")
        logger.info("Database connection OK")
    except Exception as e:
        logger.warning("Database not reachable at startup: %s (app will still start)", e)
    yield
    # --- shutdown ---
    await close_pool()


app = FastAPI(
    title="Train Ticker API",
    description="Departure board API for trains and their daily schedules",
    lifespan=lifespan,
)


# must be added before CORSMiddleware: error responses need CORS headers too
@app.middleware("http")
async def unhandled_exception_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse(
            "An error occurred while processing your request", status_code=500
        )


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(trains_router)
app.include_router(health_router)


@app.get("/")
def read_root():
    return {"message": "Train Ticker API"}
