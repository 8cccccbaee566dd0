from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase

User = get_user_model()


class UserApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.teacher = User.objects.create_user(username="t_alex", role="teacher", name="Prof. Alex")
        cls.student = User.objects.create_user(username="s_ria", role="student", name="Ria Gupta")

    def test_create_user(self):
        r = self.client.post("/api/users/", {"username": "s_new", "role": "student", "name": "New"}, format="json")
        self.assertEqual(r.status_code, 201)
        user = User.objects.get(id=r.json()["id"])
        self.assertEqual(user.role, "student")
        self.assertFalse(user.has_usable_password())

    def test_invalid_role_rejected(self):
        r = self.client.post("/api/users/", {"username": "x", "role": "dean"}, format="json")
        self.assertEqual(r.status_code, 400)

    def test_duplicate_username_rejected(self):
        r = self.client.post("/api/users/", {"username": "t_alex", "role": "teacher"}, format="json")
        self.assertEqual(r.status_code, 400)

    def test_list_and_filter(self):
        r = self.client.get("/api/users/")
        self.assertEqual([u["username"] for u in r.json()], ["t_alex", "s_ria"])
        r = self.client.get("/api/users/", {"role": "teacher"})
        self.assertEqual([u["username"] for u in r.json()], ["t_alex"])

    def test_put_keeps_missing_fields(self):
        r = self.client.put(f"/api/users/{self.teacher.id}/", {"name": "Alex B."}, format="json")
        self.assertEqual(r.status_code, 200)
        self.teacher.refresh_from_db()
        self.assertEqual((self.teacher.name, self.teacher.role, self.teacher.username),
                         ("Alex B.", "teacher", "t_alex"))

    def test_delete(self):
        self.assertEqual(self.client.delete(f"/api/users/{self.student.id}/").status_code, 204)
        self.assertEqual(self.client.delete(f"/api/users/{self.student.id}/").status_code, 404)

    def test_students_only(self):
        r = self.client.get("/api/students/")
        self.assertEqual(r.json(), [{"id": self.student.id, "username": "s_ria", "name": "Ria Gupta"}])

    def test_health(self):
        self.assertEqual(self.client.get("/api/health/").json(), {"status": "ok"})
