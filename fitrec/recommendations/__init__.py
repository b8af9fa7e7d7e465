# -*- coding: utf-8 -*-
"""
Recommendation model

Workout and nutrition recommendations share one lifecycle record (views,
completion, sharing, expiry, snapshot) and add their own progress tracking.
"""

from .base import Recommendation, RECOMMENDATION_SOURCES
from .workout import WorkoutRecommendation, ExerciseCompletion
from .nutrition import NutritionRecommendation, MealLogEntry, WaterLogEntry
from .factory import RecommendationFactory, UnknownRecommendationTypeError
from .models import (
    Exercise,
    MacroAmounts,
    MacroNutrient,
    MacroTargets,
    Meal,
    MealPlan,
    RecommendationValidation,
)

__all__ = [
    'Recommendation',
    'RECOMMENDATION_SOURCES',
    'WorkoutRecommendation',
    'ExerciseCompletion',
    'NutritionRecommendation',
    'MealLogEntry',
    'WaterLogEntry',
    'RecommendationFactory',
    'UnknownRecommendationTypeError',
    'Exercise',
    'MacroAmounts',
    'MacroNutrient',
    'MacroTargets',
    'Meal',
    'MealPlan',
    'RecommendationValidation',
]
