# -*- coding: utf-8 -*-
"""Workout recommendation — exercise plan and per-exercise progress."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from .base import Recommendation, number_field, utcnow
from .models import Exercise

logger = logging.getLogger(__name__)

WORKOUT_DIFFICULTIES: Tuple[str, ...] = ("easy", "moderate", "hard")

_EXERCISE_KEY = re.compile(r"^exercise_.+_(completed|completedAt|actualSets|actualReps)$")


@dataclass
class ExerciseCompletion:
    """One exercise marked done, with what was actually performed."""
    completed_at: datetime
    actual_sets: Optional[int] = None
    actual_reps: Optional[str] = None


def _exercise_list(value: Any) -> List[Exercise]:
    return [Exercise.model_validate(item) for item in value or []]


@dataclass(eq=False)
class WorkoutRecommendation(Recommendation):
    exercises: List[Exercise] = field(default_factory=list)
    estimated_duration: float = 0  # minutes
    difficulty: str = "moderate"
    target_muscles: List[str] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)
    warm_up: Optional[List[Exercise]] = None
    cool_down: Optional[List[Exercise]] = None
    alternatives: Optional[List[Exercise]] = None

    # Progress tracking
    exercises_completed: int = field(default=0, init=False)
    completed_exercises: Dict[str, ExerciseCompletion] = field(default_factory=dict, init=False)
    actual_duration: Optional[float] = field(default=None, init=False)
    calories_burned: Optional[float] = field(default=None, init=False)
    average_heart_rate: Optional[float] = field(default=None, init=False)
    max_heart_rate: Optional[float] = field(default=None, init=False)
    perceived_exertion: Optional[int] = field(default=None, init=False)  # 1-10

    type: ClassVar[str] = "workout"
    REQUIRED_KEYS: ClassVar[Tuple[str, ...]] = Recommendation.REQUIRED_KEYS + (
        "exercises",
        "estimatedDuration",
        "difficulty",
        "targetMuscles",
        "equipment",
    )

    def __post_init__(self) -> None:
        if self.difficulty not in WORKOUT_DIFFICULTIES:
            raise ValueError(f"difficulty must be one of: {', '.join(WORKOUT_DIFFICULTIES)}")

    @classmethod
    def _variant_kwargs(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "exercises": _exercise_list(data["exercises"]),
            "estimated_duration": number_field(data, "estimatedDuration"),
            "difficulty": data["difficulty"],
            "target_muscles": list(data["targetMuscles"]),
            "equipment": list(data["equipment"]),
        }
        for key, attr in (("warmUp", "warm_up"), ("coolDown", "cool_down"), ("alternatives", "alternatives")):
            if data.get(key) is not None:
                kwargs[attr] = _exercise_list(data[key])
        return kwargs

    @classmethod
    def is_reserved_metadata_key(cls, key: str) -> bool:
        if super().is_reserved_metadata_key(key):
            return True
        return isinstance(key, str) and _EXERCISE_KEY.match(key) is not None

    # ---- progress -----------------------------------------------------

    def complete_exercise(
        self,
        exercise_id: str,
        actual_sets: Optional[int] = None,
        actual_reps: Optional[str] = None,
    ) -> bool:
        """Record an exercise as done.

        Returns False without touching any state when the id is not part of
        this plan or was already completed.
        """
        if not any(exercise.id == exercise_id for exercise in self.exercises):
            logger.debug("Workout %s has no exercise %s; ignoring completion", self.id, exercise_id)
            return False
        if exercise_id in self.completed_exercises:
            logger.debug("Exercise %s already completed in workout %s", exercise_id, self.id)
            return False
        self.completed_exercises[exercise_id] = ExerciseCompletion(
            completed_at=utcnow(),
            actual_sets=actual_sets,
            actual_reps=actual_reps,
        )
        self.exercises_completed = len(self.completed_exercises)
        return True

    def get_completion_percentage(self) -> float:
        if not self.exercises:
            return 0.0
        return self.exercises_completed / len(self.exercises) * 100

    def get_remaining_exercises(self) -> List[Exercise]:
        return [exercise for exercise in self.exercises if exercise.id not in self.completed_exercises]

    def record_session(
        self,
        *,
        actual_duration: Optional[float] = None,
        calories_burned: Optional[float] = None,
        average_heart_rate: Optional[float] = None,
        max_heart_rate: Optional[float] = None,
        perceived_exertion: Optional[int] = None,
    ) -> None:
        """Store post-workout measurements; only the values given are updated."""
        if actual_duration is not None and actual_duration < 0:
            raise ValueError("actual_duration must not be negative")
        if calories_burned is not None and calories_burned < 0:
            raise ValueError("calories_burned must not be negative")
        for name, value in (("average_heart_rate", average_heart_rate), ("max_heart_rate", max_heart_rate)):
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive")
        if perceived_exertion is not None and not 1 <= perceived_exertion <= 10:
            raise ValueError("perceived_exertion must be between 1 and 10")
        average = average_heart_rate if average_heart_rate is not None else self.average_heart_rate
        peak = max_heart_rate if max_heart_rate is not None else self.max_heart_rate
        if average is not None and peak is not None and average > peak:
            raise ValueError("average_heart_rate cannot exceed max_heart_rate")

        if actual_duration is not None:
            self.actual_duration = actual_duration
        if calories_burned is not None:
            self.calories_burned = calories_burned
        if average_heart_rate is not None:
            self.average_heart_rate = average_heart_rate
        if max_heart_rate is not None:
            self.max_heart_rate = max_heart_rate
        if perceived_exertion is not None:
            self.perceived_exertion = perceived_exertion

    # ---- snapshot / checks --------------------------------------------

    def _progress_metadata(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for exercise_id, completion in self.completed_exercises.items():
            prefix = f"exercise_{exercise_id}"
            out[f"{prefix}_completed"] = True
            out[f"{prefix}_completedAt"] = completion.completed_at
            out[f"{prefix}_actualSets"] = completion.actual_sets
            out[f"{prefix}_actualReps"] = completion.actual_reps
        return out

    def _variant_json(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "exercises": [exercise.to_wire() for exercise in self.exercises],
            "estimatedDuration": self.estimated_duration,
            "difficulty": self.difficulty,
            "targetMuscles": list(self.target_muscles),
            "equipment": list(self.equipment),
        }
        if self.warm_up is not None:
            result["warmUp"] = [exercise.to_wire() for exercise in self.warm_up]
        if self.cool_down is not None:
            result["coolDown"] = [exercise.to_wire() for exercise in self.cool_down]
        if self.alternatives is not None:
            result["alternatives"] = [exercise.to_wire() for exercise in self.alternatives]
        return result

    def _validation_errors(self) -> List[str]:
        errors: List[str] = []
        if not self.exercises:
            errors.append("At least one exercise is required")
        if self.estimated_duration <= 0:
            errors.append("Estimated duration must be positive")
        if not self.target_muscles:
            errors.append("At least one target muscle is required")
        return errors
