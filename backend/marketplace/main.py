import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from marketplace.config import Config
from marketplace.db.database import db
from marketplace.routers import boosts, catalog, health, orders, vendors
from marketplace.exceptions import AppException, app_exception_handler, generic_exception_handler

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.connect()
    yield
    await db.disconnect()


app = FastAPI(
    title="Marketplace Resolver API",
    version="1.0.0",
    description="Visibility, pricing and order attribution decisions for the marketplace",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(orders.router)
app.include_router(vendors.router)
app.include_router(boosts.router)
