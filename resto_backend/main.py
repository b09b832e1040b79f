# resto_backend/main.py
# type: ignore

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resto_backend.core.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from resto_backend.core.exceptions import register_exception_handlers
from resto_backend.core.logging_config import configure_logging
from resto_backend.database import Base, engine

# ***************************************************************
# 1. Import every model so SQLAlchemy registers the tables
# ***************************************************************
import resto_backend.models.auth  # User
import resto_backend.models.platform  # Company, Restaurant

# ***************************************************************
# 2. API routers
# ***************************************************************
from resto_backend.api.endpoints import auth
from resto_backend.api.endpoints import companies
from resto_backend.api.endpoints import restaurants
from resto_backend.api.endpoints import users

configure_logging()
logger = logging.getLogger(__name__)


def create_tables():
    """Create every table that does not exist yet."""
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Restaurant Backend API",
    version="1.0.0",
    description="Users, companies and restaurants with ownership-based access rules.",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ***************************************************************
# 3. Routers
# ***************************************************************
app.include_router(auth.router, tags=["Auth"], prefix="/api/auth")
app.include_router(users.router, tags=["Users"], prefix="/api/users")
app.include_router(companies.router, tags=["Companies"], prefix="/api/companies")
app.include_router(restaurants.router, tags=["Restaurants"], prefix="/api/restaurants")


@app.get("/api/health", tags=["Health"])
def health_check():
    return {"status": "ok"}


def run():
    """Console entry point: serve the API with uvicorn on HOST:PORT."""
    uvicorn.run("resto_backend.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
