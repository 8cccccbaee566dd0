from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase

from core.models import Semester
from subjects.models import Subject, CourseOffering
from assessments.models import Assessment, Mark

User = get_user_model()


class AssessmentApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        sem = Semester.objects.create(name="Sem 1", ordinal=1)
        subject = Subject.objects.create(code="CS101", title="Intro", credits=4)
        cls.offering = CourseOffering.objects.create(subject=subject, semester=sem)
        cls.student = User.objects.create_user(username="s_ankit", role="student")

    def _create(self, **overrides):
        body = {"course_offering": self.offering.id, "name": "Quiz", "max_marks": 20, "weight_percent": 10}
        body.update(overrides)
        return self.client.post("/api/assessments/", body, format="json")

    def test_create(self):
        r = self._create()
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.json()["max_marks"], 20.0)

    def test_zero_max_marks_rejected(self):
        r = self._create(max_marks=0)
        self.assertEqual(r.status_code, 400)
        self.assertIn("max_marks", r.json())

    def test_weight_out_of_range_rejected(self):
        self.assertEqual(self._create(weight_percent=150).status_code, 400)
        self.assertEqual(self._create(weight_percent=-1).status_code, 400)

    def test_weights_need_not_sum_to_100(self):
        self.assertEqual(self._create(weight_percent=80).status_code, 201)
        self.assertEqual(self._create(weight_percent=80).status_code, 201)

    def test_filter_by_offering(self):
        self._create()
        r = self.client.get("/api/assessments/", {"course_offering": self.offering.id})
        self.assertEqual(len(r.json()), 1)
        r = self.client.get("/api/assessments/", {"course_offering": 9999})
        self.assertEqual(r.status_code, 400)

    def test_put_keeps_missing_fields(self):
        a = Assessment.objects.create(course_offering=self.offering, name="Viva", max_marks=10, weight_percent=10)
        r = self.client.put(f"/api/assessments/{a.id}/", {"weight_percent": 15}, format="json")
        self.assertEqual(r.status_code, 200)
        a.refresh_from_db()
        self.assertEqual((a.name, a.max_marks, a.weight_percent), ("Viva", 10, 15))

    def test_update_unknown(self):
        r = self.client.put("/api/assessments/9999/", {"name": "x"}, format="json")
        self.assertEqual(r.status_code, 404)

    def test_delete_cascades_marks(self):
        a = Assessment.objects.create(course_offering=self.offering, name="Viva", max_marks=10, weight_percent=10)
        Mark.objects.create(assessment=a, student=self.student, marks_obtained=7)
        self.assertEqual(self.client.delete(f"/api/assessments/{a.id}/").status_code, 204)
        self.assertFalse(Mark.objects.exists())

    def test_marks_of_assessment(self):
        a = Assessment.objects.create(course_offering=self.offering, name="Viva", max_marks=10, weight_percent=10)
        Mark.objects.create(assessment=a, student=self.student, marks_obtained=7)
        r = self.client.get(f"/api/assessments/{a.id}/marks/")
        self.assertEqual(r.json()[0]["marks_obtained"], 7.0)
        self.assertEqual(r.json()[0]["student"]["username"], "s_ankit")


class MarkApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        sem = Semester.objects.create(name="Sem 1", ordinal=1)
        subject = Subject.objects.create(code="CS101", title="Intro", credits=4)
        offering = CourseOffering.objects.create(subject=subject, semester=sem)
        cls.assessment = Assessment.objects.create(course_offering=offering, name="Final", max_marks=50,
                                                   weight_percent=70)
        cls.s1 = User.objects.create_user(username="s_ankit", role="student")
        cls.s2 = User.objects.create_user(username="s_ria", role="student")
        cls.teacher = User.objects.create_user(username="t_alex", role="teacher")

    def test_create_and_update(self):
        r = self.client.post("/api/marks/", {"assessment": self.assessment.id, "student": self.s1.id,
                                             "marks_obtained": 35}, format="json")
        self.assertEqual(r.status_code, 201)
        mark_id = r.json()["id"]
        r = self.client.put(f"/api/marks/{mark_id}/", {"marks_obtained": 38}, format="json")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(Mark.objects.get(id=mark_id).marks_obtained, 38)

    def test_above_max_is_accepted(self):
        r = self.client.post("/api/marks/", {"assessment": self.assessment.id, "student": self.s1.id,
                                             "marks_obtained": 60}, format="json")
        self.assertEqual(r.status_code, 201)

    def test_one_mark_per_student_and_assessment(self):
        body = {"assessment": self.assessment.id, "student": self.s1.id, "marks_obtained": 35}
        self.assertEqual(self.client.post("/api/marks/", body, format="json").status_code, 201)
        self.assertEqual(self.client.post("/api/marks/", body, format="json").status_code, 400)

    def test_student_role_required(self):
        body = {"assessment": self.assessment.id, "student": self.teacher.id, "marks_obtained": 35}
        self.assertEqual(self.client.post("/api/marks/", body, format="json").status_code, 400)

    def test_delete_not_allowed(self):
        m = Mark.objects.create(assessment=self.assessment, student=self.s1, marks_obtained=10)
        self.assertEqual(self.client.delete(f"/api/marks/{m.id}/").status_code, 405)

    def test_bulk_upsert(self):
        existing = Mark.objects.create(assessment=self.assessment, student=self.s1, marks_obtained=10)
        r = self.client.post("/api/marks/bulk/", {
            "assessment": self.assessment.id,
            "entries": [
                {"student": self.s1.id, "marks_obtained": 30},
                {"student": self.s2.id, "marks_obtained": "41.5"},
                {"student": self.teacher.id, "marks_obtained": 20},
                {"student": self.s2.id, "marks_obtained": "abc"},
            ],
        }, format="json")
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(data["updated"], [existing.id])
        self.assertEqual(len(data["created"]), 1)
        self.assertEqual([s["reason"] for s in data["skipped"]], ["Student not found", "Invalid value"])
        self.assertEqual(Mark.objects.get(student=self.s2).marks_obtained, 41.5)
        existing.refresh_from_db()
        self.assertEqual(existing.marks_obtained, 30)

    def test_bulk_skips_values_beyond_field_precision(self):
        r = self.client.post("/api/marks/bulk/", {
            "assessment": self.assessment.id,
            "entries": [
                {"student": self.s1.id, "marks_obtained": "123456789"},
                {"student": self.s2.id, "marks_obtained": "12.345"},
            ],
        }, format="json")
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(data["created"], [])
        self.assertEqual([s["reason"] for s in data["skipped"]], ["Out of range", "Out of range"])
        self.assertFalse(Mark.objects.filter(assessment=self.assessment).exists())
        # les notes du lot n'ont rien cassé côté calcul
        r = self.client.get(f"/api/student/{self.s1.id}/course/{self.assessment.course_offering_id}/summary/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["course_percent"], 0.0)

    def test_bulk_accepts_string_student_ids(self):
        r = self.client.post("/api/marks/bulk/", {
            "assessment": self.assessment.id,
            "entries": [
                {"student": str(self.s1.id), "marks_obtained": 25},
                {"student": "abc", "marks_obtained": 25},
            ],
        }, format="json")
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(len(data["created"]), 1)
        self.assertEqual(data["skipped"], [{"student": "abc", "reason": "Student not found"}])
        self.assertEqual(Mark.objects.get(student=self.s1).marks_obtained, 25)

    def test_bulk_requires_fields(self):
        r = self.client.post("/api/marks/bulk/", {"assessment": self.assessment.id,
                                                  "entries": [{"student": self.s1.id}]}, format="json")
        self.assertEqual(r.status_code, 400)
        r = self.client.post("/api/marks/bulk/", {"assessment": 9999, "entries": []}, format="json")
        self.assertEqual(r.status_code, 400)
