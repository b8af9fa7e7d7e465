# -*- coding: utf-8 -*-
"""Build recommendation instances from untyped payloads."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Type

from .base import Recommendation
from .nutrition import NutritionRecommendation
from .workout import WorkoutRecommendation

logger = logging.getLogger(__name__)


class UnknownRecommendationTypeError(ValueError):
    """Raised when a payload's ``type`` tag names no known variant."""

    def __init__(self, recommendation_type: Any) -> None:
        super().__init__(f"Unknown recommendation type: {recommendation_type}")
        self.recommendation_type = recommendation_type


class RecommendationFactory:
    """Dispatches on the ``type`` discriminator to the matching variant."""

    VARIANTS: Dict[str, Type[Recommendation]] = {
        WorkoutRecommendation.type: WorkoutRecommendation,
        NutritionRecommendation.type: NutritionRecommendation,
    }

    @classmethod
    def create(cls, data: Mapping[str, Any]) -> Recommendation:
        recommendation_type = data.get("type")
        variant = cls.VARIANTS.get(recommendation_type) if isinstance(recommendation_type, str) else None
        if variant is None:
            logger.warning("Rejected recommendation payload with type %r", recommendation_type)
            raise UnknownRecommendationTypeError(recommendation_type)
        return variant.from_dict(data)

    @staticmethod
    def create_workout(data: Mapping[str, Any]) -> WorkoutRecommendation:
        return WorkoutRecommendation.from_dict(data)

    @staticmethod
    def create_nutrition(data: Mapping[str, Any]) -> NutritionRecommendation:
        return NutritionRecommendation.from_dict(data)
