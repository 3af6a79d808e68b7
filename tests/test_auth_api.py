import unittest

from quizboard.auth.auth_handler import decode_access_token
from tests.base import ApiTestCase, PASSWORD


class TestSignup(ApiTestCase):

    def test_signup_student_with_assignment(self):
        teacher_id = self.make_teacher("Frizzle", ["Science"])
        user = self.signup("Arnold", "student", subjects=["Science", "Math"], teacher_ids=[teacher_id])

        self.assertEqual(user["role"], "student")
        self.assertEqual(user["email"], "arnold@school.test")
        self.assertEqual(user["subjects"], ["Science", "Math"])
        self.assertEqual(user["teacher_ids"], [teacher_id])
        self.assertNotIn("password", user)

    def test_email_is_normalized(self):
        user = self.signup("Wanda", "student", email="  Wanda@School.TEST ")
        self.assertEqual(user["email"], "wanda@school.test")

    def test_duplicate_email_is_rejected(self):
        self.signup("Wanda", "student")
        response = self.client.post("/api/auth/signup", json={
            "username": "Other", "email": "WANDA@school.test", "password": PASSWORD, "role": "teacher"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"detail": "User already exists"})

    def test_missing_fields_are_a_validation_error(self):
        response = self.client.post("/api/auth/signup", json={"username": "NoMail", "role": "student"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.json()["detail"])

    def test_unknown_role_is_rejected(self):
        response = self.client.post("/api/auth/signup", json={
            "username": "X", "email": "x@school.test", "password": PASSWORD, "role": "admin"})
        self.assertEqual(response.status_code, 400)


class TestLogin(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.teacher_id = self.make_teacher("Frizzle", ["Science"])
        self.student_id = self.make_student("Arnold", ["Science"], [self.teacher_id])

    def login(self, **overrides):
        payload = {"email": "arnold@school.test", "password": PASSWORD, "role": "student", **overrides}
        return self.client.post("/api/auth/login", json=payload)

    def test_login_returns_profile_and_token(self):
        response = self.login()
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["user"]["id"], self.student_id)
        self.assertEqual(body["token_type"], "bearer")
        claims = decode_access_token(body["access_token"])
        self.assertEqual(claims["id"], self.student_id)
        self.assertEqual(claims["role"], "student")

    def test_wrong_password(self):
        response = self.login(password="nope")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Invalid credentials")

    def test_unknown_email_gives_same_error(self):
        response = self.login(email="ghost@school.test")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Invalid credentials")

    def test_role_mismatch(self):
        response = self.login(role="teacher")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Role mismatch")

    def test_matching_claims_pass(self):
        self.assertEqual(self.login(subjects=["Science"]).status_code, 200)
        self.assertEqual(self.login(subjects=["Art"], teacher_ids=[self.teacher_id]).status_code, 200)

    def test_mismatched_claims_are_rejected(self):
        response = self.login(subjects=["Art"], teacher_ids=[9999])
        self.assertEqual(response.status_code, 400)

    def test_teacher_login_with_teaching_subjects(self):
        payload = {"email": "frizzle@school.test", "password": PASSWORD, "role": "teacher"}
        ok = self.client.post("/api/auth/login", json={**payload, "teacher_subjects": ["Science"]})
        bad = self.client.post("/api/auth/login", json={**payload, "teacher_subjects": ["History"]})
        self.assertEqual(ok.status_code, 200, ok.text)
        self.assertEqual(bad.status_code, 400)


class TestProfiles(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.teacher_id = self.make_teacher("Frizzle", ["Science", "Math"])
        self.student_id = self.make_student("Arnold", ["Science"], [self.teacher_id])

    def test_get_user_data_for_student_includes_teacher_details(self):
        response = self.client.post("/api/auth/getUserData", json={
            "username": "arnold", "role": "student", "email": "arnold@school.test"})
        self.assertEqual(response.status_code, 200, response.text)
        details = response.json()["teacher_details"]
        self.assertEqual(len(details), 1)
        self.assertEqual(details[0]["id"], self.teacher_id)
        self.assertEqual(details[0]["teacher_subjects"], ["Science", "Math"])

    def test_get_user_data_requires_email_for_students(self):
        response = self.client.post("/api/auth/getUserData", json={"username": "Arnold", "role": "student"})
        self.assertEqual(response.status_code, 400)

    def test_get_user_data_not_found(self):
        response = self.client.post("/api/auth/getUserData", json={"username": "Nobody", "role": "teacher"})
        self.assertEqual(response.status_code, 404)

    def test_get_teacher_and_student(self):
        teacher = self.client.get(f"/api/auth/teacher/{self.teacher_id}")
        self.assertEqual(teacher.status_code, 200)
        self.assertEqual(teacher.json()["teacher_subjects"], ["Science", "Math"])

        # a student id is not a teacher
        self.assertEqual(self.client.get(f"/api/auth/teacher/{self.student_id}").status_code, 404)
        self.assertEqual(self.client.get(f"/api/auth/student/{self.student_id}").status_code, 200)
        self.assertEqual(self.client.get("/api/auth/student/9999").status_code, 404)

    def test_update_student_assignment(self):
        other_teacher = self.make_teacher("Ratburn", ["Math"])
        response = self.client.put(f"/api/auth/student/{self.student_id}",
                                   json={"subjects": ["Math", "Math", "Art"], "teacher_ids": [other_teacher]})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["subjects"], ["Math", "Art"])
        self.assertEqual(response.json()["teacher_ids"], [other_teacher])

        # fields left out are kept
        response = self.client.put(f"/api/auth/student/{self.student_id}", json={"subjects": ["History"]})
        self.assertEqual(response.json()["teacher_ids"], [other_teacher])

    def test_update_unknown_student(self):
        response = self.client.put("/api/auth/student/9999", json={"subjects": ["Math"]})
        self.assertEqual(response.status_code, 404)

    def test_verify_email_and_reset_password(self):
        self.assertEqual(self.client.post("/api/auth/verify-email", json={"email": "arnold@school.test"}).status_code, 200)
        self.assertEqual(self.client.post("/api/auth/verify-email", json={"email": "x@school.test"}).status_code, 404)
        self.assertEqual(self.client.post("/api/auth/verify-email", json={}).status_code, 400)

        response = self.client.post("/api/auth/forgot-password",
                                    json={"email": "arnold@school.test", "new_password": "changed"})
        self.assertEqual(response.status_code, 200)
        login = self.client.post("/api/auth/login",
                                 json={"email": "arnold@school.test", "password": "changed", "role": "student"})
        self.assertEqual(login.status_code, 200)


class TestStudentListings(ApiTestCase):

    def test_students_with_stats_and_teacher_filter(self):
        teacher_id = self.make_teacher("Frizzle", ["Math"])
        other_id = self.make_teacher("Ratburn", ["Math"])
        arnold = self.make_student("Arnold", ["Math"], [teacher_id])
        self.make_student("Buster", [], [other_id])
        quiz_id = self.make_quiz(teacher_id)
        self.submit(quiz_id, arnold, {"0": 1, "1": 0, "2": 1, "3": 3})

        students = self.client.get("/api/auth/students").json()
        self.assertEqual(len(students), 2)
        by_name = {s["username"]: s for s in students}
        self.assertEqual(by_name["Arnold"]["completed_quizzes"], 1)
        self.assertEqual(by_name["Arnold"]["average_score"], 75)
        self.assertEqual(by_name["Buster"]["subjects"], ["Not Assigned"])
        self.assertEqual(by_name["Buster"]["completed_quizzes"], 0)

        mine = self.client.get(f"/api/auth/students/teacher/{teacher_id}").json()
        self.assertEqual([s["id"] for s in mine], [arnold])


if __name__ == '__main__':
    unittest.main()
