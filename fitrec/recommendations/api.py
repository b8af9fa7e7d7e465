# -*- coding: utf-8 -*-
"""Recommendations — API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from .factory import RecommendationFactory, UnknownRecommendationTypeError
from .models import RecommendationValidation

router = APIRouter(prefix="/api/recommendations", tags=["Recommendations"])


class NormalizeResponse(BaseModel):
    recommendation: Dict[str, Any]
    validation: RecommendationValidation


@router.post(
    "/normalize",
    response_model=NormalizeResponse,
    summary="Build a recommendation from a tagged payload and report structural problems",
)
def normalize_recommendation(payload: Dict[str, Any] = Body(...)):
    try:
        recommendation = RecommendationFactory.create(payload)
    except UnknownRecommendationTypeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (ValueError, TypeError) as exc:
        raise HTTPException(status_code=422, detail=f"Invalid recommendation payload: {exc}") from exc
    return NormalizeResponse(recommendation=recommendation.to_json(), validation=recommendation.validate())
