# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from fitrec.api import app

_PROFILE = {
    "userId": "u1",
    "age": 16,
    "physicalStats": {"weight": 70, "height": 175, "gender": "male"},
    "goals": ["weight_loss", "muscle_gain"],
    "fitnessLevel": "beginner",
    "activityLevel": "sedentary",
}

_WORKOUT = {
    "id": "w-1",
    "userId": "u1",
    "type": "workout",
    "title": "Quick circuit",
    "description": "Bodyweight circuit",
    "exercises": [{"id": "pushup", "name": "Push-up", "recommendedSets": 3}],
    "estimatedDuration": 15,
    "difficulty": "easy",
    "targetMuscles": ["chest"],
    "equipment": [],
    "confidence": 0.8,
}


class TestApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})

    def test_validate_profile(self) -> None:
        resp = self.client.post("/api/profiles/validate", json={"profile": _PROFILE, "strict": False})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertIs(body["isValid"], True)
        self.assertEqual(body["errors"], [])
        self.assertEqual(len(body["warnings"]), 2)

    def test_validate_profile_strict(self) -> None:
        resp = self.client.post("/api/profiles/validate", json={"profile": _PROFILE, "strict": True})
        body = resp.json()
        self.assertIs(body["isValid"], False)
        self.assertEqual(len(body["errors"]), 2)
        self.assertEqual(body["warnings"], [])

    def test_validate_partial_profile(self) -> None:
        resp = self.client.post(
            "/api/profiles/validate",
            json={"profile": {**_PROFILE, "userId": ""}, "allowPartial": True, "strict": False},
        )
        body = resp.json()
        self.assertIs(body["isValid"], False)
        self.assertEqual(body["errors"], ["User ID is required"])

        resp = self.client.post(
            "/api/profiles/validate",
            json={"profile": {"userId": "u1"}, "allowPartial": True, "strict": False},
        )
        self.assertIn("Age is required", resp.json()["errors"])

    def test_validate_field(self) -> None:
        resp = self.client.post("/api/profiles/validate-field", json={"field": "goals", "value": []})
        self.assertEqual(resp.json()["errors"], ["At least one goal is required"])

        resp = self.client.post("/api/profiles/validate-field", json={"field": "shoeSize", "value": 44})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"isValid": False, "errors": ["Unknown field: shoeSize"], "warnings": []})

    def test_sanitize(self) -> None:
        resp = self.client.post(
            "/api/profiles/sanitize",
            json={"profile": {"age": 200, "goals": ["strength", "nope"], "fitnessLevel": "elite"}},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"age": 120, "goals": ["strength"], "fitnessLevel": "beginner"})

    def test_sanitize_huge_number(self) -> None:
        resp = self.client.post("/api/profiles/sanitize", json={"profile": {"age": 10**400}})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"age": 120})

    def test_sanitize_requires_a_profile_object(self) -> None:
        resp = self.client.post("/api/profiles/sanitize", json={"profile": "not a profile"})
        self.assertEqual(resp.status_code, 422)

    def test_normalize_recommendation(self) -> None:
        resp = self.client.post("/api/recommendations/normalize", json=_WORKOUT)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["validation"], {"isValid": True, "errors": []})
        recommendation = body["recommendation"]
        self.assertEqual(recommendation["type"], "workout")
        self.assertEqual(recommendation["exercises"][0]["recommendedSets"], 3)
        self.assertEqual(recommendation["metadata"]["viewCount"], 0)
        self.assertEqual(recommendation["metadata"]["confidence"], 0.8)

    def test_normalize_reports_structural_problems(self) -> None:
        resp = self.client.post("/api/recommendations/normalize", json={**_WORKOUT, "estimatedDuration": 0})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["validation"]["errors"], ["Estimated duration must be positive"])

    def test_normalize_rejects_non_numeric_values(self) -> None:
        for field, value in (("estimatedDuration", "thirty"), ("estimatedDuration", True)):
            resp = self.client.post("/api/recommendations/normalize", json={**_WORKOUT, field: value})
            self.assertEqual(resp.status_code, 422, value)
            self.assertIn(field, resp.json()["detail"])

        nutrition = {
            "id": "n-1",
            "userId": "u1",
            "type": "nutrition",
            "title": "Plan",
            "description": "Daily plan",
            "dailyCalories": "lots",
            "mealPlan": {"totalCalories": 2000, "meals": []},
            "hydrationGoal": 2,
        }
        resp = self.client.post("/api/recommendations/normalize", json=nutrition)
        self.assertEqual(resp.status_code, 422)
        self.assertIn("dailyCalories", resp.json()["detail"])

    def test_normalize_unknown_type(self) -> None:
        resp = self.client.post("/api/recommendations/normalize", json={**_WORKOUT, "type": "sleep"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Unknown recommendation type: sleep")

    def test_normalize_missing_field(self) -> None:
        payload = dict(_WORKOUT)
        del payload["title"]
        resp = self.client.post("/api/recommendations/normalize", json=payload)
        self.assertEqual(resp.status_code, 422)
        self.assertIn("title", resp.json()["detail"])


if __name__ == "__main__":
    unittest.main()
