# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fitrec.recommendations import MacroAmounts, NutritionRecommendation


def _macro(grams: float, kcal_per_gram: float, percentage: float) -> dict:
    return {"grams": grams, "calories": grams * kcal_per_gram, "percentage": percentage}


def _nutrition_payload(**overrides) -> dict:
    payload = {
        "id": "n-1",
        "userId": "user_1",
        "type": "nutrition",
        "title": "Cutting plan",
        "description": "Moderate deficit with high protein",
        "dailyCalories": 2000,
        "macroTargets": {
            "calories": 2000,
            "protein": _macro(150, 4, 30),
            "carbohydrates": _macro(200, 4, 40),
            "fats": _macro(67, 9, 30),
        },
        "mealPlan": {
            "totalCalories": 2000,
            "meals": [
                {"type": "breakfast", "targetCalories": 500, "suggestions": ["Oats with berries"]},
                {"type": "lunch", "targetCalories": 700},
            ],
        },
        "hydrationGoal": 2.5,
        "supplements": ["vitamin D"],
    }
    payload.update(overrides)
    return payload


class TestMealLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.plan = NutritionRecommendation.from_dict(_nutrition_payload())

    def test_log_meal_accumulates_totals(self) -> None:
        self.plan.log_meal("breakfast", 450, {"protein": 30, "carbs": 55, "fats": 12})
        self.plan.log_meal("lunch", 650, MacroAmounts(protein=45, carbs=70, fats=20))

        self.assertEqual(self.plan.calories_consumed, 1100)
        self.assertEqual(self.plan.macros_consumed, MacroAmounts(protein=75, carbs=125, fats=32))
        self.assertEqual(self.plan.meals_completed, 2)
        self.assertEqual([entry.meal_type for entry in self.plan.meal_log], ["breakfast", "lunch"])

    def test_same_meal_type_keeps_every_log_entry(self) -> None:
        self.plan.log_meal("snack", 150, {"protein": 5, "carbs": 20, "fats": 5})
        self.plan.log_meal("snack", 200, {"protein": 10, "carbs": 25, "fats": 6})

        self.assertEqual(len(self.plan.meal_log), 2)
        self.assertEqual(self.plan.meals_completed, 2)
        metadata = self.plan.to_json()["metadata"]
        self.assertIs(metadata["meal_snack_logged"], True)
        self.assertEqual(metadata["meal_snack_calories"], 200)
        self.assertEqual(metadata["meal_snack_macros"], {"protein": 10, "carbs": 25, "fats": 6})

    def test_negative_intake_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.plan.log_meal("dinner", -100, {"protein": 0, "carbs": 0, "fats": 0})
        with self.assertRaises(ValueError):
            self.plan.log_meal("dinner", 100, {"protein": -1, "carbs": 0, "fats": 0})
        with self.assertRaises(ValueError):
            self.plan.log_water_intake(-0.5)
        self.assertEqual(self.plan.calories_consumed, 0)
        self.assertEqual(self.plan.meals_completed, 0)
        self.assertEqual(self.plan.water_intake, 0)

    def test_non_finite_intake_is_rejected(self) -> None:
        for bad in (float("nan"), float("inf"), "500", True):
            with self.assertRaises(ValueError):
                self.plan.log_meal("dinner", bad, {"protein": 0, "carbs": 0, "fats": 0})
            with self.assertRaises(ValueError):
                self.plan.log_water_intake(bad)
        with self.assertRaises(ValueError):
            self.plan.log_meal("dinner", 100, {"protein": float("nan"), "carbs": 0, "fats": 0})

        self.assertEqual(self.plan.calories_consumed, 0)
        self.assertEqual(self.plan.meal_log, [])
        self.assertEqual(self.plan.get_calorie_adherence(), 0.0)
        self.assertEqual(self.plan.get_hydration_adherence(), 0.0)

    def test_log_water_intake(self) -> None:
        self.plan.log_water_intake(0.5)
        self.plan.log_water_intake(0.75)

        self.assertAlmostEqual(self.plan.water_intake, 1.25)
        self.assertEqual([entry.amount for entry in self.plan.water_log], [0.5, 0.75])
        water_log = self.plan.to_json()["metadata"]["waterIntakeLog"]
        self.assertEqual([item["amount"] for item in water_log], [0.5, 0.75])
        self.assertTrue(all("timestamp" in item for item in water_log))


class TestAdherence(unittest.TestCase):
    def setUp(self) -> None:
        self.plan = NutritionRecommendation.from_dict(_nutrition_payload())

    def test_calorie_adherence(self) -> None:
        self.plan.log_meal("lunch", 500, {"protein": 0, "carbs": 0, "fats": 0})
        self.assertEqual(self.plan.get_calorie_adherence(), 25.0)

    def test_calorie_adherence_is_capped_at_100(self) -> None:
        self.plan.log_meal("feast", 3000, {"protein": 0, "carbs": 0, "fats": 0})
        self.assertEqual(self.plan.get_calorie_adherence(), 100.0)

    def test_hydration_adherence(self) -> None:
        self.plan.log_water_intake(1.25)
        self.assertEqual(self.plan.get_hydration_adherence(), 50.0)
        self.plan.log_water_intake(5)
        self.assertEqual(self.plan.get_hydration_adherence(), 100.0)

    def test_macro_adherence(self) -> None:
        self.plan.log_meal("dinner", 800, {"protein": 75, "carbs": 250, "fats": 0})
        self.assertEqual(
            self.plan.get_macro_adherence(),
            {"protein": 50.0, "carbohydrates": 100.0, "fats": 0.0},
        )

    def test_zero_targets_do_not_divide_by_zero(self) -> None:
        plan = NutritionRecommendation.from_dict(_nutrition_payload(dailyCalories=0, hydrationGoal=0))
        plan.log_meal("lunch", 300, {"protein": 0, "carbs": 0, "fats": 0})
        self.assertEqual(plan.get_calorie_adherence(), 0.0)
        self.assertEqual(plan.get_hydration_adherence(), 0.0)


class TestNutritionValidation(unittest.TestCase):
    def test_valid_plan(self) -> None:
        result = NutritionRecommendation.from_dict(_nutrition_payload()).validate()
        self.assertTrue(result.is_valid)

    def test_reports_every_problem(self) -> None:
        plan = NutritionRecommendation.from_dict(
            _nutrition_payload(dailyCalories=-1, macroTargets=None, hydrationGoal=0)
        )
        result = plan.validate()
        self.assertFalse(result.is_valid)
        self.assertEqual(
            result.errors,
            [
                "Daily calories must be positive",
                "Macro targets are required",
                "Hydration goal must be positive",
            ],
        )

    def test_snapshot_carries_plan_content(self) -> None:
        snapshot = NutritionRecommendation.from_dict(_nutrition_payload()).to_json()
        self.assertEqual(snapshot["type"], "nutrition")
        self.assertEqual(snapshot["dailyCalories"], 2000)
        self.assertEqual(snapshot["hydrationGoal"], 2.5)
        self.assertEqual(snapshot["macroTargets"]["protein"]["grams"], 150)
        self.assertEqual(snapshot["mealPlan"]["meals"][0]["targetCalories"], 500)
        self.assertEqual(snapshot["supplements"], ["vitamin D"])
        self.assertNotIn("nutritionTips", snapshot)

    def test_clone_resets_intake(self) -> None:
        plan = NutritionRecommendation.from_dict(_nutrition_payload())
        plan.log_meal("breakfast", 400, {"protein": 20, "carbs": 50, "fats": 10})
        plan.log_water_intake(1)

        copy = plan.clone("n-2")

        self.assertIsInstance(copy, NutritionRecommendation)
        self.assertEqual(copy.id, "n-2")
        self.assertEqual(copy.daily_calories, 2000)
        self.assertEqual(copy.calories_consumed, 0)
        self.assertEqual(copy.meal_log, [])
        self.assertEqual(copy.water_intake, 0)
        self.assertNotIn("waterIntakeLog", copy.metadata)
        self.assertNotIn("meal_breakfast_logged", copy.metadata)


if __name__ == "__main__":
    unittest.main()
