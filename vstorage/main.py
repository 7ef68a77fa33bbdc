from fastapi import FastAPI, Request
import os
import logging
from dotenv import load_dotenv

from . import __version__
from .api.files import router as files_router
from .config import create_default_storage
from .exceptions import StorageConfigurationError

# Load environment variables
load_dotenv()

# Set up logging
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Virtual Storage",
    description="One storage interface dispatching to several storage backends",
    version=__version__
)

# Initialize storage on startup
@app.on_event("startup")
async def startup_event():
    """Build the virtual storage and attach it to application state."""
    if getattr(app.state, "storage", None) is not None:
        return
    try:
        app.state.storage = create_default_storage()
        logger.info("Virtual storage initialized successfully")
    except StorageConfigurationError as e:
        logger.error(f"Failed to initialize virtual storage: {e}")
        raise RuntimeError(f"Storage initialization failed: {e}") from e

# Include API routers
app.include_router(files_router)

@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint for monitoring and deployment validation"""
    storage = getattr(request.app.state, "storage", None)
    return {
        "status": "healthy" if storage is not None else "starting",
        "service": "vstorage",
        "version": __version__,
        "strategy": storage.get_strategy().get_strategy_name() if storage is not None else None,
    }

if __name__ == "__main__":
    import uvicorn
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    debug = os.getenv("DEBUG", "False").lower() == "true"

    uvicorn.run("vstorage.main:app", host=host, port=port, reload=debug)
