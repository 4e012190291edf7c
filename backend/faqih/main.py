import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

logging.basicConfig(level=logging.INFO)
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from faqih.config import settings
from faqih.middleware.rate_limit import limiter
from faqih.models.schemas import HealthResponse
from faqih.routers import chat, fatwas, license_card
from faqih.services.dataset import get_fatwas
from faqih.services.llm import close_http_client
from faqih.services.semantic_fallback import get_semantic_fallback
from faqih.services.speech import get_speech_capability

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the dataset once; a broken dataset aborts startup
    get_fatwas()
    yield
    await close_http_client()


app = FastAPI(
    title="Tabib Faqih",
    description="الطبيب الفقيه: medical fatwa lookup for physicians",
    version=VERSION,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


app.include_router(chat.router)
app.include_router(fatwas.router)
app.include_router(license_card.router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="ok",
        version=VERSION,
        fatwa_count=len(get_fatwas()),
        speech_available=get_speech_capability().available,
        semantic_fallback_enabled=get_semantic_fallback() is not None,
    )
