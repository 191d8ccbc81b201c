#!/usr/bin/env python3
"""
hookwire webhook receiver
Main application entry point
"""

import uvicorn
from fastapi import FastAPI
import structlog

from hookwire.api.webhooks import router as webhook_router
from config.settings import settings

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(
    title="hookwire",
    description="Receiver for GitHub webhook deliveries",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# Mounted at the root: the catch-all route accepts every path but /ping
app.include_router(webhook_router, tags=["webhooks"])


@app.on_event("startup")
async def startup_event():
    logger.info("Starting hookwire webhook receiver", host=settings.HOST, port=settings.PORT)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down hookwire webhook receiver")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
