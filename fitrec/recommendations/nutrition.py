# -*- coding: utf-8 -*-
"""Nutrition recommendation — calorie/macro/hydration targets and intake logs."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union

from .base import Recommendation, number_field, utcnow
from .models import MacroAmounts, MacroTargets, MealPlan

logger = logging.getLogger(__name__)

_MEAL_KEY = re.compile(r"^meal_.+_(logged|loggedAt|calories|macros)$")
WATER_LOG_KEY = "waterIntakeLog"


@dataclass
class MealLogEntry:
    meal_type: str
    calories: float
    macros: MacroAmounts
    logged_at: datetime


@dataclass
class WaterLogEntry:
    amount: float  # litres
    timestamp: datetime


def _is_amount(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def _adherence(consumed: float, target: float) -> float:
    """Progress toward a target in percent, never above 100."""
    if target <= 0:
        return 0.0
    return min(consumed / target * 100, 100.0)


@dataclass(eq=False)
class NutritionRecommendation(Recommendation):
    daily_calories: float = 0
    macro_targets: Optional[MacroTargets] = None
    meal_plan: Optional[MealPlan] = None
    hydration_goal: float = 0  # litres
    supplements: Optional[List[str]] = None
    nutrition_tips: Optional[List[str]] = None

    calories_consumed: float = field(default=0.0, init=False)
    macros_consumed: MacroAmounts = field(default_factory=MacroAmounts, init=False)
    meals_completed: int = field(default=0, init=False)
    water_intake: float = field(default=0.0, init=False)
    meal_log: List[MealLogEntry] = field(default_factory=list, init=False)
    water_log: List[WaterLogEntry] = field(default_factory=list, init=False)

    type: ClassVar[str] = "nutrition"
    REQUIRED_KEYS: ClassVar[Tuple[str, ...]] = Recommendation.REQUIRED_KEYS + (
        "dailyCalories",
        "mealPlan",
        "hydrationGoal",
    )

    @classmethod
    def _variant_kwargs(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "daily_calories": number_field(data, "dailyCalories"),
            "meal_plan": MealPlan.model_validate(data["mealPlan"]),
            "hydration_goal": number_field(data, "hydrationGoal"),
        }
        if data.get("macroTargets") is not None:
            kwargs["macro_targets"] = MacroTargets.model_validate(data["macroTargets"])
        if data.get("supplements") is not None:
            kwargs["supplements"] = list(data["supplements"])
        if data.get("nutritionTips") is not None:
            kwargs["nutrition_tips"] = list(data["nutritionTips"])
        return kwargs

    @classmethod
    def is_reserved_metadata_key(cls, key: str) -> bool:
        if super().is_reserved_metadata_key(key) or key == WATER_LOG_KEY:
            return True
        return isinstance(key, str) and _MEAL_KEY.match(key) is not None

    # ---- intake logging -----------------------------------------------

    def log_meal(
        self,
        meal_type: str,
        calories: float,
        macros: Union[MacroAmounts, Mapping[str, float]],
    ) -> MealLogEntry:
        if not _is_amount(calories):
            raise ValueError(f"calories must be a finite, non-negative number, got {calories!r}")
        amounts = MacroAmounts.model_validate(macros)
        entry = MealLogEntry(meal_type=meal_type, calories=calories, macros=amounts, logged_at=utcnow())

        self.calories_consumed += calories
        self.macros_consumed = self.macros_consumed.plus(amounts)
        self.meals_completed += 1
        self.meal_log.append(entry)
        logger.debug("Logged %s (%s kcal) on nutrition plan %s", meal_type, calories, self.id)
        return entry

    def log_water_intake(self, amount: float) -> WaterLogEntry:
        if not _is_amount(amount):
            raise ValueError(f"water amount must be a finite, non-negative number, got {amount!r}")
        entry = WaterLogEntry(amount=amount, timestamp=utcnow())
        self.water_intake += amount
        self.water_log.append(entry)
        return entry

    def get_calorie_adherence(self) -> float:
        return _adherence(self.calories_consumed, self.daily_calories)

    def get_hydration_adherence(self) -> float:
        return _adherence(self.water_intake, self.hydration_goal)

    def get_macro_adherence(self) -> Dict[str, float]:
        if self.macro_targets is None:
            return {"protein": 0.0, "carbohydrates": 0.0, "fats": 0.0}
        return {
            "protein": _adherence(self.macros_consumed.protein, self.macro_targets.protein.grams),
            "carbohydrates": _adherence(self.macros_consumed.carbs, self.macro_targets.carbohydrates.grams),
            "fats": _adherence(self.macros_consumed.fats, self.macro_targets.fats.grams),
        }

    # ---- snapshot / checks --------------------------------------------

    def _progress_metadata(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        # Later logs of the same meal type replace earlier ones in the snapshot.
        for entry in self.meal_log:
            prefix = f"meal_{entry.meal_type}"
            out[f"{prefix}_logged"] = True
            out[f"{prefix}_loggedAt"] = entry.logged_at
            out[f"{prefix}_calories"] = entry.calories
            out[f"{prefix}_macros"] = entry.macros.to_wire()
        if self.water_log:
            out[WATER_LOG_KEY] = [
                {"amount": entry.amount, "timestamp": entry.timestamp} for entry in self.water_log
            ]
        return out

    def _variant_json(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "dailyCalories": self.daily_calories,
            "macroTargets": self.macro_targets.to_wire() if self.macro_targets is not None else None,
            "mealPlan": self.meal_plan.to_wire() if self.meal_plan is not None else None,
            "hydrationGoal": self.hydration_goal,
        }
        if self.supplements is not None:
            result["supplements"] = list(self.supplements)
        if self.nutrition_tips is not None:
            result["nutritionTips"] = list(self.nutrition_tips)
        return result

    def _validation_errors(self) -> List[str]:
        errors: List[str] = []
        if self.daily_calories <= 0:
            errors.append("Daily calories must be positive")
        if self.macro_targets is None:
            errors.append("Macro targets are required")
        if self.hydration_goal <= 0:
            errors.append("Hydration goal must be positive")
        return errors
