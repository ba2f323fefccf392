"""
FastAPI application setup for the storage-demo Web UI.
"""

from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from fastapi.requests import Request

from . import __version__ as WEB_VERSION
from .routes import router

# Load .env file (if present) so STORAGE_DEMO_HOME / STORAGE_DEMO_API_LEVEL apply
load_dotenv()

# Paths
WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"

# App
app = FastAPI(
    title="storage-demo",
    description="Save and load text through preferences, files and a database",
    version=WEB_VERSION,
)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Include API routes
app.include_router(router)


@app.get("/")
async def index(request: Request):
    """Serve the storage screen."""
    return templates.TemplateResponse(request, "index.html")
