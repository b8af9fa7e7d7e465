# -*- coding: utf-8 -*-
"""Recommendation content — Pydantic models.

These describe the content a recommendation engine produces (exercises,
macro targets, meal plans). Wire names are camelCase; Python attributes are
snake_case and both are accepted on input.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ContentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ProgressionStep(_ContentModel):
    sets: int = Field(..., ge=0)
    reps: str
    weight: Optional[float] = Field(None, ge=0, description="kg")


class ExerciseProgression(_ContentModel):
    beginner: ProgressionStep
    intermediate: ProgressionStep
    advanced: ProgressionStep


class Exercise(_ContentModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    type: Optional[Literal["strength", "cardio", "flexibility", "core", "balance"]] = None
    target_muscles: List[str] = Field(default_factory=list, alias="targetMuscles")
    equipment: str = ""
    difficulty: Optional[Literal["beginner", "intermediate", "advanced"]] = None
    instructions: List[str] = Field(default_factory=list)
    image_url: Optional[str] = Field(None, alias="imageUrl")
    video_url: Optional[str] = Field(None, alias="videoUrl")
    body_part: str = Field("", alias="bodyPart")
    secondary_muscles: Optional[List[str]] = Field(None, alias="secondaryMuscles")
    tips: Optional[List[str]] = None
    variations: Optional[List[str]] = None
    safety_notes: Optional[List[str]] = Field(None, alias="safetyNotes")
    recommended_sets: Optional[int] = Field(None, ge=0, alias="recommendedSets")
    recommended_reps: Optional[str] = Field(None, alias="recommendedReps", description="e.g. '8-12' or '30 seconds'")
    rest_time: Optional[float] = Field(None, ge=0, alias="restTime", description="seconds")
    weight: Optional[float] = Field(None, ge=0, description="kg")
    progression: Optional[ExerciseProgression] = None


class MacroNutrient(_ContentModel):
    grams: float = Field(..., ge=0)
    calories: float = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)


class MacroTargets(_ContentModel):
    calories: float = Field(..., ge=0)
    protein: MacroNutrient
    carbohydrates: MacroNutrient
    fats: MacroNutrient


class MacroAmounts(_ContentModel):
    """Grams of each macro actually consumed."""

    model_config = ConfigDict(allow_inf_nan=False)

    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)

    def plus(self, other: "MacroAmounts") -> "MacroAmounts":
        return MacroAmounts(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )


class Ingredient(_ContentModel):
    name: str
    amount: float = Field(..., ge=0)
    unit: str
    optional: Optional[bool] = None
    substitutes: Optional[List[str]] = None


class RecipeNutrition(_ContentModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fats: float = Field(..., ge=0)
    fiber: Optional[float] = Field(None, ge=0)


class Recipe(_ContentModel):
    id: str
    name: str
    description: str = ""
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    nutrition: RecipeNutrition
    prep_time: float = Field(0, ge=0, alias="prepTime", description="minutes")
    cook_time: float = Field(0, ge=0, alias="cookTime", description="minutes")
    servings: int = Field(1, ge=1)
    difficulty: Literal["easy", "medium", "hard"] = "easy"
    tags: List[str] = Field(default_factory=list)


class Meal(_ContentModel):
    type: str = Field(..., description="breakfast | lunch | dinner | snack")
    target_calories: float = Field(..., ge=0, alias="targetCalories")
    target_protein: float = Field(0, ge=0, alias="targetProtein")
    target_carbs: float = Field(0, ge=0, alias="targetCarbs")
    target_fats: float = Field(0, ge=0, alias="targetFats")
    suggestions: List[str] = Field(default_factory=list)
    recipes: Optional[List[Recipe]] = None


class MealPlan(_ContentModel):
    total_calories: float = Field(..., ge=0, alias="totalCalories")
    meals: List[Meal] = Field(default_factory=list)
    guidelines: Optional[List[str]] = None
    shopping_list: Optional[List[str]] = Field(None, alias="shoppingList")


class RecommendationValidation(BaseModel):
    """Outcome of a recommendation's structural check (no warnings channel)."""

    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(..., alias="isValid")
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "RecommendationValidation":
        return cls(is_valid=not errors, errors=list(errors))
