# -*- coding: utf-8 -*-
"""
User profile validation and sanitization

validate() reports problems in two tiers: errors reject the profile,
warnings accept it but flag medical-caution or best-practice issues.
sanitize() never rejects; it repairs what it can and drops the rest.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..config import settings
from .models import (
    ACTIVITY_LEVELS,
    DIETARY_RESTRICTIONS,
    FITNESS_LEVELS,
    GENDERS,
    INTENSITY_PREFERENCES,
    PREFERRED_DURATIONS,
    REQUIRED_PROFILE_FIELDS,
    SLEEP_QUALITIES,
    SOCIAL_SUPPORT_LEVELS,
    STRESS_LEVELS,
    TRAVEL_FREQUENCIES,
    WEEKDAYS,
    WORK_SCHEDULES,
    WORKOUT_ENVIRONMENTS,
    WORKOUT_GOALS,
    ValidationOptions,
    ValidationResult,
)

logger = logging.getLogger(__name__)

_USER_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
_MAX_STRING_LENGTH = 100

# (min, max) bounds
AGE_RANGE = (13, 120)
WEIGHT_RANGE_KG = (30, 300)
HEIGHT_RANGE_CM = (100, 250)
BODY_FAT_RANGE = (3, 50)
WORKOUTS_PER_WEEK_RANGE = (1, 14)

_PREFERENCE_LISTS = (
    ("preferredExercises", "Preferred exercises"),
    ("dislikedExercises", "Disliked exercises"),
    ("availableEquipment", "Available equipment"),
)

Messages = List[str]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    """True for None, False, empty strings and zero; containers always count as present."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if _is_number(value):
        return value == 0
    return False


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _one_of(values: Tuple[str, ...]) -> str:
    return ", ".join(values)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: Any, low: int, high: int) -> Optional[int]:
    if not _is_number(value):
        return None
    # Arbitrarily large ints cannot be converted to float.
    if isinstance(value, int):
        return max(low, min(high, value))
    if not math.isfinite(value):
        return None
    return max(low, min(high, _round_half_up(value)))


def _bmi(weight_kg: Any, height_cm: Any) -> Optional[float]:
    """Body mass index, or None when the inputs cannot produce a finite value."""
    if not (_is_number(weight_kg) and _is_number(height_cm)) or not (weight_kg and height_cm):
        return None
    try:
        weight, height = float(weight_kg), float(height_cm)
        if not (math.isfinite(weight) and math.isfinite(height)):
            return None
        bmi = weight / (height / 100) ** 2
    except (OverflowError, ZeroDivisionError):
        return None
    return bmi if math.isfinite(bmi) else None


class UserProfileValidator:
    """Stateless profile checker; safe to share or create per request."""

    def __init__(self, max_goals: Optional[int] = None) -> None:
        self.max_goals = max_goals if max_goals is not None else settings.max_goals

    # ---- reporting ----------------------------------------------------

    def _field_checks(self) -> Dict[str, Callable[[Any, Messages, Messages], None]]:
        # Order matters: messages are reported in this sequence.
        return {
            "userId": self._validate_user_id,
            "age": self._validate_age,
            "physicalStats": self._validate_physical_stats,
            "goals": self._validate_goals,
            "fitnessLevel": self._validate_fitness_level,
            "activityLevel": self._validate_activity_level,
            "dietaryRestrictions": self._validate_dietary_restrictions,
            "preferences": self._validate_preferences,
            "timeConstraints": self._validate_time_constraints,
            "lifestyle": self._validate_lifestyle,
        }

    def validate(
        self,
        profile: Optional[Mapping[str, Any]],
        options: Optional[ValidationOptions] = None,
    ) -> ValidationResult:
        options = options or ValidationOptions()
        profile = profile if isinstance(profile, Mapping) else {}
        errors: Messages = []
        warnings: Messages = []

        if not options.allow_partial:
            for name in REQUIRED_PROFILE_FIELDS:
                if _is_blank(profile.get(name)):
                    errors.append(f"{name} is required")

        # allow_partial only lifts the "<field> is required" block; every
        # field rule still runs.
        for name, check in self._field_checks().items():
            check(profile.get(name), errors, warnings)

        if options.strict:
            errors.extend(warnings)
            warnings = []

        if errors:
            logger.debug("Profile %r rejected with %d error(s)", profile.get("userId"), len(errors))
        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def validate_field(self, field_name: str, value: Any) -> ValidationResult:
        errors: Messages = []
        warnings: Messages = []
        check = self._field_checks().get(field_name)
        if check is None:
            errors.append(f"Unknown field: {field_name}")
        else:
            check(value, errors, warnings)
        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def _validate_user_id(self, user_id: Any, errors: Messages, warnings: Messages) -> None:
        if _is_blank(user_id):
            errors.append("User ID is required")
            return
        if not isinstance(user_id, str):
            errors.append("User ID must be a string")
            return
        if not 1 <= len(user_id) <= 100:
            errors.append("User ID must be between 1 and 100 characters")
        if not _USER_ID_PATTERN.fullmatch(user_id):
            errors.append("User ID can only contain letters, numbers, hyphens, and underscores")

    def _validate_age(self, age: Any, errors: Messages, warnings: Messages) -> None:
        if age is None:
            errors.append("Age is required")
            return
        if not _is_number(age) or (isinstance(age, float) and not age.is_integer()):
            errors.append("Age must be a whole number")
            return

        low, high = AGE_RANGE
        if age < low:
            errors.append(f"Age must be at least {low} years old")
        elif age > high:
            errors.append(f"Age must be less than {high} years old")

        if age < 18:
            warnings.append(
                "Users under 18 should consult with a healthcare provider before starting any fitness program"
            )
        if age > 65:
            warnings.append(
                "Users over 65 should consult with a healthcare provider before starting any new fitness program"
            )

    def _validate_physical_stats(self, stats: Any, errors: Messages, warnings: Messages) -> None:
        if _is_blank(stats):
            errors.append("Physical stats are required")
            return
        if not isinstance(stats, Mapping):
            stats = {}

        weight = stats.get("weight")
        if not _is_number(weight):
            errors.append("Weight must be a number")
        elif not WEIGHT_RANGE_KG[0] <= weight <= WEIGHT_RANGE_KG[1]:
            errors.append("Weight must be between 30 and 300 kg")

        height = stats.get("height")
        if not _is_number(height):
            errors.append("Height must be a number")
        elif not HEIGHT_RANGE_CM[0] <= height <= HEIGHT_RANGE_CM[1]:
            errors.append("Height must be between 100 and 250 cm")

        if stats.get("gender") not in GENDERS:
            errors.append("Gender must be male, female, or other")

        body_fat = stats.get("bodyFatPercentage")
        if body_fat is not None:
            if not _is_number(body_fat):
                warnings.append("Body fat percentage must be a number")
            elif not BODY_FAT_RANGE[0] <= body_fat <= BODY_FAT_RANGE[1]:
                warnings.append("Body fat percentage should be between 3% and 50%")

        bmi = _bmi(weight, height)
        if bmi is not None:
            if bmi < 16:
                warnings.append("BMI indicates severe underweight - please consult a healthcare provider")
            elif bmi > 40:
                warnings.append("BMI indicates severe obesity - please consult a healthcare provider")

    def _validate_goals(self, goals: Any, errors: Messages, warnings: Messages) -> None:
        if not _is_list(goals):
            errors.append("Goals must be an array")
            return
        if not goals:
            errors.append("At least one goal is required")
            return

        invalid = [goal for goal in goals if goal not in WORKOUT_GOALS]
        if invalid:
            errors.append(f"Invalid goals: {', '.join(str(goal) for goal in invalid)}")

        if len(goals) > self.max_goals:
            warnings.append(f"Having more than {self.max_goals} goals may reduce recommendation effectiveness")

        if "weight_loss" in goals and "muscle_gain" in goals:
            warnings.append("Weight loss and muscle gain goals may conflict - consider prioritizing one")

    def _validate_fitness_level(self, level: Any, errors: Messages, warnings: Messages) -> None:
        if level not in FITNESS_LEVELS:
            errors.append(f"Fitness level must be one of: {_one_of(FITNESS_LEVELS)}")

    def _validate_activity_level(self, level: Any, errors: Messages, warnings: Messages) -> None:
        if level not in ACTIVITY_LEVELS:
            errors.append(f"Activity level must be one of: {_one_of(ACTIVITY_LEVELS)}")

    def _validate_dietary_restrictions(self, restrictions: Any, errors: Messages, warnings: Messages) -> None:
        if _is_blank(restrictions):
            return
        if not _is_list(restrictions):
            warnings.append("Dietary restrictions must be an array")
            return
        unknown = [item for item in restrictions if item not in DIETARY_RESTRICTIONS]
        if unknown:
            warnings.append(f"Unknown dietary restrictions: {', '.join(str(item) for item in unknown)}")

    def _validate_preferences(self, preferences: Any, errors: Messages, warnings: Messages) -> None:
        if _is_blank(preferences) or not isinstance(preferences, Mapping):
            return
        for key, label in _PREFERENCE_LISTS:
            value = preferences.get(key)
            if not _is_blank(value) and not _is_list(value):
                warnings.append(f"{label} must be an array")

    def _validate_time_constraints(self, constraints: Any, errors: Messages, warnings: Messages) -> None:
        if _is_blank(constraints) or not isinstance(constraints, Mapping):
            return
        duration = constraints.get("preferredDuration")
        if not _is_blank(duration) and duration not in PREFERRED_DURATIONS:
            warnings.append(f"Preferred duration must be one of: {_one_of(PREFERRED_DURATIONS)}")
        days = constraints.get("availableDays")
        if not _is_blank(days) and not _is_list(days):
            warnings.append("Available days must be an array")

    def _validate_lifestyle(self, lifestyle: Any, errors: Messages, warnings: Messages) -> None:
        if _is_blank(lifestyle) or not isinstance(lifestyle, Mapping):
            return
        stress = lifestyle.get("stressLevel")
        if not _is_blank(stress) and stress not in STRESS_LEVELS:
            warnings.append(f"Stress level must be one of: {_one_of(STRESS_LEVELS)}")
        sleep = lifestyle.get("sleepQuality")
        if not _is_blank(sleep) and sleep not in SLEEP_QUALITIES:
            warnings.append(f"Sleep quality must be one of: {_one_of(SLEEP_QUALITIES)}")

    # ---- repair -------------------------------------------------------

    def sanitize(self, profile: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Best-effort cleaned copy of the fields present in ``profile``.

        Out-of-range numbers are clamped and rounded, invalid enumerations
        fall back to a safe default, lists keep only recognised entries and
        values of the wrong type are dropped. Never raises.
        """
        if not isinstance(profile, Mapping):
            return {}
        sanitized: Dict[str, Any] = {}

        user_id = profile.get("userId")
        if isinstance(user_id, str) and user_id:
            sanitized["userId"] = _sanitize_string(user_id)

        age = _clamp(profile.get("age"), *AGE_RANGE)
        if age is not None:
            sanitized["age"] = age

        stats = profile.get("physicalStats")
        if isinstance(stats, Mapping):
            sanitized["physicalStats"] = _sanitize_physical_stats(stats)

        goals = profile.get("goals")
        if _is_list(goals):
            sanitized["goals"] = [goal for goal in goals if goal in WORKOUT_GOALS][: self.max_goals]

        fitness_level = profile.get("fitnessLevel")
        if not _is_blank(fitness_level):
            sanitized["fitnessLevel"] = fitness_level if fitness_level in FITNESS_LEVELS else "beginner"

        activity_level = profile.get("activityLevel")
        if not _is_blank(activity_level):
            sanitized["activityLevel"] = (
                activity_level if activity_level in ACTIVITY_LEVELS else "moderately_active"
            )

        restrictions = profile.get("dietaryRestrictions")
        if _is_list(restrictions):
            sanitized["dietaryRestrictions"] = [item for item in restrictions if item in DIETARY_RESTRICTIONS]

        preferences = profile.get("preferences")
        if isinstance(preferences, Mapping):
            sanitized["preferences"] = _sanitize_preferences(preferences)

        constraints = profile.get("timeConstraints")
        if isinstance(constraints, Mapping):
            sanitized["timeConstraints"] = _sanitize_time_constraints(constraints)

        lifestyle = profile.get("lifestyle")
        if isinstance(lifestyle, Mapping):
            sanitized["lifestyle"] = _sanitize_lifestyle(lifestyle)

        return sanitized


def _sanitize_string(value: str) -> str:
    return value.strip()[:_MAX_STRING_LENGTH]


def _sanitize_string_list(values: Any) -> List[str]:
    cleaned = (_sanitize_string(item) for item in values if isinstance(item, str))
    return [item for item in cleaned if item]


def _sanitize_physical_stats(stats: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    weight = _clamp(stats.get("weight"), *WEIGHT_RANGE_KG)
    if weight is not None:
        out["weight"] = weight
    height = _clamp(stats.get("height"), *HEIGHT_RANGE_CM)
    if height is not None:
        out["height"] = height
    gender = stats.get("gender")
    out["gender"] = gender if gender in GENDERS else "other"
    body_fat = stats.get("bodyFatPercentage")
    if not _is_blank(body_fat):
        clamped = _clamp(body_fat, *BODY_FAT_RANGE)
        if clamped is not None:
            out["bodyFatPercentage"] = clamped
    return out


def _sanitize_preferences(preferences: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in ("preferredExercises", "dislikedExercises", "availableEquipment", "musicPreferences"):
        value = preferences.get(key)
        if _is_list(value):
            out[key] = _sanitize_string_list(value)
    environment = preferences.get("workoutEnvironment")
    if environment in WORKOUT_ENVIRONMENTS:
        out["workoutEnvironment"] = environment
    intensity = preferences.get("intensityPreference")
    if intensity in INTENSITY_PREFERENCES:
        out["intensityPreference"] = intensity
    partner = preferences.get("workoutPartner")
    if isinstance(partner, bool):
        out["workoutPartner"] = partner
    return out


def _sanitize_time_constraints(constraints: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    duration = constraints.get("preferredDuration")
    if duration in PREFERRED_DURATIONS:
        out["preferredDuration"] = duration
    days = constraints.get("availableDays")
    if _is_list(days):
        normalized = [item.lower() for item in _sanitize_string_list(days)]
        out["availableDays"] = list(dict.fromkeys(day for day in normalized if day in WEEKDAYS))
    times = constraints.get("preferredTimes")
    if _is_list(times):
        out["preferredTimes"] = _sanitize_string_list(times)
    per_week = _clamp(constraints.get("maxWorkoutsPerWeek"), *WORKOUTS_PER_WEEK_RANGE)
    if per_week is not None:
        out["maxWorkoutsPerWeek"] = per_week
    return out


def _sanitize_lifestyle(lifestyle: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {
        "stressLevel": STRESS_LEVELS,
        "sleepQuality": SLEEP_QUALITIES,
        "workSchedule": WORK_SCHEDULES,
        "travelFrequency": TRAVEL_FREQUENCIES,
        "socialSupport": SOCIAL_SUPPORT_LEVELS,
    }
    return {key: lifestyle[key] for key, values in allowed.items() if lifestyle.get(key) in values}
