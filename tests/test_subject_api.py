import unittest

from tests.base import ApiTestCase


class TestSubjectApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.teacher_id = self.make_teacher("Frizzle", ["Science"])

    def test_create_then_existing_returns_200(self):
        created = self.client.post("/api/subjects/create", json={"name": "Science", "teacher_id": self.teacher_id})
        self.assertEqual(created.status_code, 201, created.text)
        self.assertEqual(created.json()["teacher_name"], "Frizzle")

        again = self.client.post("/api/subjects/create", json={"name": " Science ", "teacher_id": self.teacher_id})
        self.assertEqual(again.status_code, 200)
        self.assertEqual(again.json()["id"], created.json()["id"])

    def test_name_and_teacher_are_required(self):
        self.assertEqual(self.client.post("/api/subjects/create", json={"name": "  "}).status_code, 400)
        self.assertEqual(self.client.post("/api/subjects/create", json={"name": "Art"}).status_code, 400)

    def test_owner_must_be_an_existing_teacher(self):
        student_id = self.make_student("Arnold")
        for teacher_id in (9999, student_id):
            response = self.client.post("/api/subjects/create", json={"name": "Art", "teacher_id": teacher_id})
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json(), {"detail": "Teacher not found"})
        self.assertEqual(self.client.get("/api/subjects/").json(), [])

    def test_list_is_sorted_by_name(self):
        for name in ["Science", "Art", "Math"]:
            self.client.post("/api/subjects/create", json={"name": name, "teacher_id": self.teacher_id})
        names = [s["name"] for s in self.client.get("/api/subjects/").json()]
        self.assertEqual(names, ["Art", "Math", "Science"])

    def test_teachers_by_subject(self):
        self.make_teacher("Ratburn", ["Math", "Science"])
        self.make_teacher("Read", ["History"])
        teachers = self.client.get("/api/subjects/teachers/Science").json()
        self.assertEqual(sorted(t["username"] for t in teachers), ["Frizzle", "Ratburn"])
        self.assertEqual(self.client.get("/api/subjects/teachers/Latin").json(), [])


if __name__ == '__main__':
    unittest.main()
