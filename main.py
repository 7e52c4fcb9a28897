import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import ledgerbook.models  # ensure models are registered
from ledgerbook.core.config import settings, configure_logging
from ledgerbook.utils.database import engine, Base
from ledgerbook.utils.summary_cache import SummaryCache
from ledgerbook.initial_data import init_seed

from ledgerbook.routers import (
    accounts_router,
    obligations_router,
    reports_router,
    cheques_router,
    expenses_router,
    settings_router,
    orders_router,
)

logger = logging.getLogger("ledgerbook")

app = FastAPI(title="Ledgerbook API", version="1.0")

# one summary memo per app instance
app.state.summary_cache = SummaryCache(max_keys=settings.SUMMARY_CACHE_MAX_KEYS)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(accounts_router.router)
app.include_router(obligations_router.router)
app.include_router(reports_router.router)
app.include_router(cheques_router.router)
app.include_router(expenses_router.router)
app.include_router(settings_router.router)
app.include_router(orders_router.router)


@app.on_event("startup")
def on_startup():
    configure_logging()

    Base.metadata.create_all(bind=engine)

    logger.info("Running initial database seeding")
    init_seed()
    logger.info("Seeding complete")


@app.get("/")
def root():
    return {"message": "Ledgerbook backend is running"}
