"""FastAPI application for the pairswap quote service.

The service is read-only: it exposes the pure quoting math and pool address
derivation, never pool state.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pairswap import __version__
from pairswap.api.endpoints import router
from pairswap.api.models import ErrorResponse
from pairswap.config import EngineConfig
from pairswap.errors import AMMError, ErrorCategory
from pairswap.log_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("PAIRSWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("PAIRSWAP_PORT", "8000"))
DEBUG = os.environ.get("PAIRSWAP_DEBUG", "false").lower() in ("true", "1", "yes")

logger = structlog.get_logger()

app = FastAPI(
    title="Pairswap quote API",
    description="Constant-product swap quoting and pool address derivation",
    version=__version__,
)

app.include_router(router)


@app.exception_handler(AMMError)
async def amm_error_handler(request: Request, exc: AMMError) -> JSONResponse:
    """Map engine errors to 404 (lookups) or 400 (everything else)."""
    status_code = 404 if exc.category is ErrorCategory.NOT_FOUND else 400
    logger.info("request_rejected", path=request.url.path, code=exc.code.value)
    body = ErrorResponse(code=exc.code.value, category=exc.category.value, detail=exc.detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - PAIRSWAP_HOST: Host to bind to (default: 0.0.0.0)
    - PAIRSWAP_PORT: Port to bind to (default: 8000)
    - PAIRSWAP_DEBUG: Enable reload mode (default: false)
    - PAIRSWAP_LOG_LEVEL / PAIRSWAP_LOG_JSON: Logging output
    """
    config = EngineConfig.from_env()
    configure_logging(config.log_level, config.log_json)
    uvicorn.run(
        "pairswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
