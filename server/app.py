"""FastAPI application for serving cache groups and topologies."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()  # load .env before the storage modules read their settings

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server.cache_group_routes import router as cache_group_router
from server.db import init_all
from server.topology_routes import router as topology_router
from server import topology_db

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables on startup."""
    init_all()
    yield


app = FastAPI(
    title="Topology API",
    description="API server for CDN cache groups and delivery topologies",
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
app.include_router(cache_group_router, prefix="/api")
app.include_router(topology_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "topology_db": str(topology_db.TOPOLOGY_DB_PATH),
        "endpoints": {
            "cachegroups": "/api/cachegroups",
            "topologies": "/api/topologies",
            "tree": "/api/topologies/{name}/tree",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
