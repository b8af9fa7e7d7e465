# -*- coding: utf-8 -*-
"""
fitrec API

Stateless HTTP surface over the recommendation model and the profile
validator.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .profiles.api import router as profiles_router
from .recommendations.api import router as recommendations_router

logging.getLogger("fitrec").setLevel(settings.log_level)

app = FastAPI(
    title="fitrec",
    description="Fitness/nutrition recommendation tracking and user profile validation",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profiles_router)
app.include_router(recommendations_router)


@app.get("/api/health")
def health():
    return {"status": "ok"}
