import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifesim.config import settings
from lifesim.db.connection import db_pool
from lifesim.scoring.benchmarks import BenchmarkRegistry
from lifesim.api.routes import health, health_score, scenarios, simulations

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize DB pool and load benchmarks
    db_pool.initialize()
    BenchmarkRegistry.get().load()
    yield
    # Shutdown: close DB pool
    db_pool.close()


app = FastAPI(title="Life Scenario Engine", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(simulations.router, prefix="/api")
app.include_router(scenarios.router, prefix="/api")
app.include_router(health_score.router, prefix="/api")
