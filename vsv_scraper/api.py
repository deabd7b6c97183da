"""FastAPI application exposing the VSV scrape.

Usage:
  vsv-scraper serve --port 3001
  uvicorn vsv_scraper.api:app --port 3001 --reload   (dev)

Endpoints:
  POST /api/scrape   – scrape all leagues and return teams sorted by VSV
  GET  /health       – liveness check
"""
import logging
import threading

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import pipeline
from .config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Livesport VSV API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# One scrape job at a time; later requests wait for the running one
_scrape_lock = threading.Lock()


@app.post("/api/scrape")
def scrape():
    """Scrape every league and return the teams ranked by VSV."""
    with _scrape_lock:
        try:
            result = pipeline.run_scrape()
        except Exception as e:
            logger.exception("Scraping error")
            return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    logger.info(f"Scrape finished with {len(result.teams)} teams")
    return result.to_dict()


@app.get("/health")
def health():
    return {"status": "ok"}
