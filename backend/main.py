from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skintone import __version__
from skintone.api.v1 import router as v1_router
from skintone.config import config
from skintone.schemas import HealthResponse
from skintone.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="SkinTone Palette Service",
    description="Skin undertone classification and seasonal colour palette recommendations",
    version=__version__
)

# Add CORS middleware with basic configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins() or ["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"]
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def healthz() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(ok=True, version=__version__)


logger.info("SkinTone service initialised", extra={'version': __version__})
