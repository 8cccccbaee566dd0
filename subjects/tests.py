from django.contrib.auth import get_user_model
from django.db.models import ProtectedError
from rest_framework.test import APITestCase

from core.models import Semester
from subjects.models import Subject, CourseOffering
from assessments.models import Assessment, Mark

User = get_user_model()


class CourseOfferingApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.teacher = User.objects.create_user(username="t_alex", role="teacher", name="Prof. Alex")
        cls.s1 = User.objects.create_user(username="s_ankit", role="student", name="Ankit")
        cls.s2 = User.objects.create_user(username="s_ria", role="student", name="Ria")
        cls.sem = Semester.objects.create(name="Sem 1 2025", ordinal=1)
        cls.subject = Subject.objects.create(code="CS101", title="Intro to Programming", credits=4)
        cls.offering = CourseOffering.objects.create(subject=cls.subject, semester=cls.sem, teacher=cls.teacher)
        cls.a1 = Assessment.objects.create(course_offering=cls.offering, name="Test", max_marks=20, weight_percent=30)
        cls.a2 = Assessment.objects.create(course_offering=cls.offering, name="Final", max_marks=50, weight_percent=70)
        Mark.objects.create(assessment=cls.a2, student=cls.s2, marks_obtained=40)
        Mark.objects.create(assessment=cls.a1, student=cls.s2, marks_obtained=18)
        Mark.objects.create(assessment=cls.a1, student=cls.s1, marks_obtained=12)

    def test_subject_crud(self):
        r = self.client.post("/api/subjects/", {"code": "MA101", "title": "Calculus", "credits": 3}, format="json")
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.json()["credits"], 3.0)
        r = self.client.post("/api/subjects/", {"code": "MA101", "title": "Again", "credits": 3}, format="json")
        self.assertEqual(r.status_code, 400)

    def test_list_joins_subject_semester_teacher(self):
        r = self.client.get("/api/course_offerings/")
        self.assertEqual(r.json(), [{
            "id": self.offering.id,
            "code": "CS101",
            "title": "Intro to Programming",
            "credits": 4.0,
            "semester_id": self.sem.id,
            "semester": "Sem 1 2025",
            "teacher_id": self.teacher.id,
            "teacher_name": "Prof. Alex",
        }])

    def test_offering_without_teacher(self):
        other = Subject.objects.create(code="MA101", title="Calculus", credits=3)
        r = self.client.post("/api/course_offerings/", {"subject": other.id, "semester": self.sem.id}, format="json")
        self.assertEqual(r.status_code, 201)
        r = self.client.get(f"/api/course_offerings/{r.json()['id']}/")
        self.assertIsNone(r.json()["teacher_id"])
        self.assertIsNone(r.json()["teacher_name"])

    def test_teacher_must_have_teacher_role(self):
        r = self.client.post("/api/course_offerings/",
                             {"subject": self.subject.id, "semester": self.sem.id, "teacher": self.s1.id},
                             format="json")
        self.assertEqual(r.status_code, 400)

    def test_filter_by_semester(self):
        other = Semester.objects.create(name="Sem 2 2025", ordinal=2)
        r = self.client.get("/api/course_offerings/", {"semester": other.id})
        self.assertEqual(r.json(), [])

    def test_assessments_of_offering(self):
        r = self.client.get(f"/api/course_offerings/{self.offering.id}/assessments/")
        self.assertEqual([a["name"] for a in r.json()], ["Test", "Final"])

    def test_marks_ordered_by_student_then_assessment(self):
        r = self.client.get(f"/api/course_offerings/{self.offering.id}/marks/")
        rows = [(m["student_id"], m["assessment_id"]) for m in r.json()]
        self.assertEqual(rows, [(self.s1.id, self.a1.id), (self.s2.id, self.a1.id), (self.s2.id, self.a2.id)])
        self.assertEqual(r.json()[0]["assessment_name"], "Test")
        self.assertEqual(r.json()[0]["max_marks"], 20.0)

    def test_students_lists_every_student(self):
        r = self.client.get(f"/api/course_offerings/{self.offering.id}/students/")
        self.assertEqual([s["username"] for s in r.json()], ["s_ankit", "s_ria"])

    def test_unknown_offering(self):
        self.assertEqual(self.client.get("/api/course_offerings/9999/marks/").status_code, 404)
        self.assertEqual(self.client.get("/api/course_offerings/9999/results/").status_code, 404)

    def test_subject_in_use_cannot_be_deleted(self):
        with self.assertRaises(ProtectedError):
            self.subject.delete()

    def test_delete_subject_in_use_is_a_conflict(self):
        r = self.client.delete(f"/api/subjects/{self.subject.id}/")
        self.assertEqual(r.status_code, 409)
        self.assertTrue(Subject.objects.filter(id=self.subject.id).exists())

    def test_delete_unused_subject(self):
        unused = Subject.objects.create(code="PH101", title="Physics", credits=3)
        self.assertEqual(self.client.delete(f"/api/subjects/{unused.id}/").status_code, 204)
        self.assertFalse(Subject.objects.filter(id=unused.id).exists())
