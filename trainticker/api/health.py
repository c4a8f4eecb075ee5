from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_class=PlainTextResponse)
def health_check():
    return "Train Ticker API is running! 🚂"
