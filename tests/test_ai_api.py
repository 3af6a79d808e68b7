import unittest

from quizboard.main import app
from quizboard.tips import TipsProvider, TipsResult, get_tips_provider
from tests.base import ApiTestCase


class StubTipsProvider(TipsProvider):

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def get_tips(self, weak_subjects, weakest_topics):
        self.calls.append((list(weak_subjects), list(weakest_topics)))
        if self.fail:
            raise RuntimeError("model unavailable")
        return TipsResult(tips=[f"Practice {s}" for s in weak_subjects], model="stub")


class TestAnalyticsApi(ApiTestCase):

    def test_weak_subjects_and_difficulty(self):
        teacher_id = self.make_teacher("Frizzle", ["Math", "Science"])
        student_id = self.make_student("Arnold", ["Math", "Science"], [teacher_id])
        algebra = self.make_quiz(teacher_id, "Math", "Algebra: Week 1", correct=[0, 0])
        plants = self.make_quiz(teacher_id, "Science", "Plants: Intro", correct=[0, 0, 0, 0])
        self.submit(algebra, student_id, {"0": 0, "1": 0})
        self.submit(plants, student_id, {"0": 0})

        response = self.client.get(f"/api/ai/student/{student_id}/analytics")
        self.assertEqual(response.status_code, 200, response.text)
        report = response.json()
        self.assertEqual([s["subject"] for s in report["subject_stats"]], ["Science", "Math"])
        self.assertEqual(report["subject_stats"][0]["accuracy"], 25)
        self.assertEqual(report["weak_subjects"], ["Science"])
        self.assertEqual(report["weakest_topics"], ["Plants"])
        # mean of 25 and 100
        self.assertEqual(report["recommended_difficulty"], "medium")

    def test_no_history(self):
        student_id = self.make_student("Arnold")
        report = self.client.get(f"/api/ai/student/{student_id}/analytics").json()
        self.assertEqual(report["subject_stats"], [])
        self.assertEqual(report["recommended_difficulty"], "medium")

    def test_unknown_student(self):
        response = self.client.get("/api/ai/student/9999/analytics")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"detail": "Student not found"})


class TestTipsApi(ApiTestCase):

    def tearDown(self):
        app.dependency_overrides.pop(get_tips_provider, None)
        super().tearDown()

    def test_tips_from_provider(self):
        provider = StubTipsProvider()
        app.dependency_overrides[get_tips_provider] = lambda: provider
        response = self.client.post("/api/ai/tips", json={"weak_subjects": ["Science"], "weakest_topics": ["Plants"]})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json(), {"tips": ["Practice Science"], "model": "stub"})
        self.assertEqual(provider.calls, [(["Science"], ["Plants"])])

    def test_provider_error_falls_back_to_heuristic(self):
        app.dependency_overrides[get_tips_provider] = lambda: StubTipsProvider(fail=True)
        response = self.client.post("/api/ai/tips", json={"weak_subjects": ["Science"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["model"], "heuristic")
        self.assertEqual(len(response.json()["tips"]), 3)

    def test_default_provider_is_heuristic(self):
        response = self.client.post("/api/ai/tips", json={})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["model"], "heuristic")


if __name__ == '__main__':
    unittest.main()
