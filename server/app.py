"""FastAPI application for storing and validating workflows."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file

from flowgraph.utils.logger import get_logger
from server.db import init_all
from server.node_routes import router as node_router
from server.workflow_db import WORKFLOW_DB_PATH
from server.workflow_routes import router as workflow_router

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

get_logger("flowgraph", LOG_LEVEL)
logger = get_logger("server", LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables on startup."""
    init_all()
    logger.info("workflow store ready at %s", WORKFLOW_DB_PATH)
    yield


app = FastAPI(
    title="Flowgraph API",
    description="API server for building, validating and storing automation workflows",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(workflow_router, prefix="/api")
app.include_router(node_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "workflow_db": str(WORKFLOW_DB_PATH),
        "endpoints": {
            "workflows": "/api/workflows",
            "validate": "/api/workflows/validate",
            "node_kinds": "/api/node-kinds",
            "node_configs": "/api/node-configs/validate",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
