# -*- coding: utf-8 -*-
"""User profile — enumerations and validation result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class WorkoutGoal(str, Enum):
    weight_loss = "weight_loss"
    muscle_gain = "muscle_gain"
    strength = "strength"
    endurance = "endurance"
    flexibility = "flexibility"
    general_fitness = "general_fitness"
    rehabilitation = "rehabilitation"
    sports_performance = "sports_performance"


class FitnessLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    lightly_active = "lightly_active"
    moderately_active = "moderately_active"
    very_active = "very_active"
    extremely_active = "extremely_active"


class DietaryRestriction(str, Enum):
    vegetarian = "vegetarian"
    vegan = "vegan"
    gluten_free = "gluten_free"
    dairy_free = "dairy_free"
    nut_free = "nut_free"
    low_carb = "low_carb"
    keto = "keto"
    paleo = "paleo"
    mediterranean = "mediterranean"
    halal = "halal"
    kosher = "kosher"


class PreferredDuration(str, Enum):
    short = "short"  # ~30 min
    medium = "medium"  # ~60 min
    long = "long"  # 90 min+


class StressLevel(str, Enum):
    low = "low"
    moderate = "moderate"
    high = "high"


class SleepQuality(str, Enum):
    poor = "poor"
    fair = "fair"
    good = "good"
    excellent = "excellent"


def enum_values(enum_cls: Type[Enum]) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


GENDERS = enum_values(Gender)
WORKOUT_GOALS = enum_values(WorkoutGoal)
FITNESS_LEVELS = enum_values(FitnessLevel)
ACTIVITY_LEVELS = enum_values(ActivityLevel)
DIETARY_RESTRICTIONS = enum_values(DietaryRestriction)
PREFERRED_DURATIONS = enum_values(PreferredDuration)
STRESS_LEVELS = enum_values(StressLevel)
SLEEP_QUALITIES = enum_values(SleepQuality)

WORKOUT_ENVIRONMENTS = ("home", "gym", "outdoor", "mixed")
INTENSITY_PREFERENCES = ("low", "moderate", "high", "varied")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
WORK_SCHEDULES = ("regular", "shift", "irregular")
TRAVEL_FREQUENCIES = ("never", "occasionally", "frequently")
SOCIAL_SUPPORT_LEVELS = ("low", "moderate", "high")

REQUIRED_PROFILE_FIELDS = ("userId", "age", "physicalStats", "goals", "fitnessLevel", "activityLevel")


@dataclass(frozen=True)
class ValidationOptions:
    strict: bool = False  # warnings become errors
    allow_partial: bool = False  # partial profiles for updates


class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(..., alias="isValid")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
