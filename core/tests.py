from io import StringIO

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.core.management import call_command
from rest_framework.test import APITestCase

from core.models import Semester
from subjects.models import Subject, CourseOffering
from assessments.models import Assessment, Mark
from grading.models import GradeBand

User = get_user_model()


class SemesterApiTests(APITestCase):
    def test_ordered_by_ordinal(self):
        Semester.objects.create(name="Sem 2", ordinal=2)
        Semester.objects.create(name="Sem 1", ordinal=1)
        r = self.client.get("/api/semesters/")
        self.assertEqual([s["name"] for s in r.json()], ["Sem 1", "Sem 2"])

    def test_create(self):
        r = self.client.post("/api/semesters/", {"name": "Sem 3 2026", "ordinal": 3}, format="json")
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.json()["ordinal"], 3)

    def test_create_without_ordinal(self):
        r = self.client.post("/api/semesters/", {"name": "Summer"}, format="json")
        self.assertEqual(r.status_code, 201)
        self.assertIsNone(r.json()["ordinal"])

    def test_name_required(self):
        r = self.client.post("/api/semesters/", {"ordinal": 4}, format="json")
        self.assertEqual(r.status_code, 400)
        self.assertIn("name", r.json())

    def test_delete_semester_with_offerings_is_a_conflict(self):
        sem = Semester.objects.create(name="Sem 1", ordinal=1)
        subject = Subject.objects.create(code="CS101", title="Intro", credits=4)
        CourseOffering.objects.create(subject=subject, semester=sem)
        r = self.client.delete(f"/api/semesters/{sem.id}/")
        self.assertEqual(r.status_code, 409)
        self.assertTrue(Semester.objects.filter(id=sem.id).exists())

    def test_delete_empty_semester(self):
        sem = Semester.objects.create(name="Spare")
        self.assertEqual(self.client.delete(f"/api/semesters/{sem.id}/").status_code, 204)


class SeedDemoTests(APITestCase):
    def test_seed_and_grades(self):
        call_command("seed_demo", stdout=StringIO())
        self.assertEqual(User.objects.count(), 5)
        self.assertEqual(CourseOffering.objects.count(), 3)
        self.assertEqual(Assessment.objects.count(), 6)
        self.assertEqual(Mark.objects.count(), 8)

        ankit = User.objects.get(username="s_ankit")
        cs101 = CourseOffering.objects.get(subject__code="CS101")
        r = self.client.get(f"/api/student/{ankit.id}/course/{cs101.id}/summary/")
        self.assertEqual(r.json()["grade_letter"], "B+")
        # CS102 a des épreuves mais aucune note -> F; MA101 sans épreuve -> ignoré
        r = self.client.get(f"/api/student/{ankit.id}/cgpa/")
        self.assertEqual(r.json(), {"cgpa": 4.0, "total_credits": 8.0})

    def test_seed_is_idempotent(self):
        call_command("seed_demo", stdout=StringIO())
        call_command("seed_demo", stdout=StringIO())
        self.assertEqual(Mark.objects.count(), 8)

    def test_reset(self):
        call_command("seed_demo", stdout=StringIO())
        Subject.objects.create(code="XX1", title="Extra", credits=1)
        call_command("seed_demo", "--reset", stdout=StringIO())
        self.assertFalse(Subject.objects.filter(code="XX1").exists())
        self.assertEqual(Subject.objects.count(), 3)
        self.assertEqual(GradeBand.objects.count(), 7)


class AdminRegistrationTests(APITestCase):
    def test_models_registered(self):
        for model in (User, Semester, Subject, CourseOffering, Assessment, Mark, GradeBand):
            self.assertTrue(admin.site.is_registered(model), model)
