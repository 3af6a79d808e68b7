import unittest

from tests.base import ApiTestCase


class TestDashboardApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.frizzle = self.make_teacher("Frizzle", ["Science", "Math"])
        self.ratburn = self.make_teacher("Ratburn", ["Math"])
        self.arnold = self.make_student("Arnold", ["Science", "Math"], [self.frizzle, self.ratburn])
        self.buster = self.make_student("Buster", ["Math"], [self.ratburn])

    def test_stats(self):
        self.make_quiz(self.frizzle, "Science")
        stats = self.client.get("/api/dashboard/stats").json()
        self.assertEqual(stats, {"students": 2, "teachers": 2, "subjects": 1})

    def test_students_per_subject(self):
        groups = self.client.get("/api/dashboard/students-per-subject").json()
        self.assertEqual([(g["name"], g["student_count"]) for g in groups], [("Math", 2), ("Science", 1)])
        self.assertEqual([s["username"] for s in groups[0]["students"]], ["Arnold", "Buster"])

    def test_teachers_per_subject(self):
        groups = self.client.get("/api/dashboard/teachers-per-subject").json()
        self.assertEqual([(g["subject"], g["teacher_count"]) for g in groups], [("Math", 2), ("Science", 1)])

    def test_student_subjects_pair_teachers_by_position(self):
        science_quiz = self.make_quiz(self.frizzle, "Science", correct=[0, 0])
        self.make_quiz(self.frizzle, "Science", title="Plants")
        self.submit(science_quiz, self.arnold, {"0": 0})

        body = self.client.get(f"/api/dashboard/student/{self.arnold}/subjects").json()
        self.assertEqual(body["student"]["username"], "Arnold")
        science, math = body["subjects"]
        self.assertEqual(science["teacher"]["id"], self.frizzle)
        self.assertEqual((science["completed_quizzes"], science["total_quizzes"], science["average_score"]), (1, 2, 50))
        self.assertEqual(math["teacher"]["id"], self.ratburn)
        self.assertEqual(math["total_quizzes"], 0)

    def test_student_subjects_unknown_student(self):
        self.assertEqual(self.client.get("/api/dashboard/student/9999/subjects").status_code, 404)
        self.assertEqual(self.client.get(f"/api/dashboard/student/{self.frizzle}/subjects").status_code, 404)


class TestHealth(ApiTestCase):

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


if __name__ == '__main__':
    unittest.main()
