"""
Activity Report Generator
Turns one submitted activity report into PDF, DOCX and XLSX documents.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from settings_helper import get_settings
from report_engine.branding_config import load_branding_assets
from routers import reports

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a missing branding mark is a configuration fault, refuse to start
    app.state.branding_assets = load_branding_assets(settings)
    logger.info("%s starting up...", settings.app_name)
    yield
    # Shutdown
    logger.info("%s shutting down...", settings.app_name)

app = FastAPI(
    title="Activity Report API",
    description="Activity conducted report generator (PDF, DOCX, XLSX)",
    version=settings.version,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

# Routers
app.include_router(reports.router, tags=["Reports"])


@app.get("/health")
async def health():
    return {"status": "healthy"}
