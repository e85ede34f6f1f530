"""
FastAPI application setup for the sarif-review web API.
"""

from dotenv import load_dotenv
from fastapi import FastAPI

from . import __version__ as WEB_VERSION
from .routes import router

# Load .env file (if present) so SARIF_REVIEW_* settings are available via os.environ
load_dotenv()

app = FastAPI(
    title="sarif-review",
    description="Filter, rank and discuss static-analysis results",
    version=WEB_VERSION,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness/readiness probe endpoint."""
    return {"status": "ok"}
