# -*- coding: utf-8 -*-
"""User profile — API endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from .models import ValidationOptions, ValidationResult
from .validator import UserProfileValidator

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])


class ProfileValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: Dict[str, Any]
    strict: Optional[bool] = Field(None, description="Treat warnings as errors; defaults to server setting")
    allow_partial: bool = Field(False, alias="allowPartial", description="Only validate fields that are present")


class FieldValidateRequest(BaseModel):
    field: str = Field(..., min_length=1)
    value: Any = None


class ProfileSanitizeRequest(BaseModel):
    profile: Dict[str, Any]


def get_validator() -> UserProfileValidator:
    return UserProfileValidator(max_goals=settings.max_goals)


@router.post("/validate", response_model=ValidationResult, summary="Validate a user profile")
def validate_profile(
    payload: ProfileValidateRequest,
    validator: UserProfileValidator = Depends(get_validator),
):
    strict = settings.strict_validation if payload.strict is None else payload.strict
    options = ValidationOptions(strict=strict, allow_partial=payload.allow_partial)
    return validator.validate(payload.profile, options)


@router.post("/validate-field", response_model=ValidationResult, summary="Validate a single profile field")
def validate_profile_field(
    payload: FieldValidateRequest,
    validator: UserProfileValidator = Depends(get_validator),
):
    return validator.validate_field(payload.field, payload.value)


@router.post("/sanitize", response_model=Dict[str, Any], summary="Clamp and clean a (partial) user profile")
def sanitize_profile(
    payload: ProfileSanitizeRequest,
    validator: UserProfileValidator = Depends(get_validator),
):
    return validator.sanitize(payload.profile)
