from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before configuration is read
load_dotenv()

from colorpalette import __version__
from colorpalette.api.v1 import router as v1_router
from colorpalette.config import Config
from colorpalette.schemas import HealthResponse
from colorpalette.utils.logging import get_logger
from colorpalette.utils.metrics import get_metrics

config = Config()
get_logger()

app = FastAPI(
    title="colorpalette",
    description="Color conversion, palette extraction and generation, themes and WCAG contrast",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Service health check."""
    return HealthResponse(ok=True, version=__version__, service="colorpalette")


@app.get("/metrics")
def metrics():
    """In-process counters and timing statistics."""
    return get_metrics().get_summary()


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "colorpalette API",
        "version": __version__,
        "docs": "/docs"
    }
