from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APITestCase

from core.models import Semester
from subjects.models import Subject, CourseOffering
from assessments.models import Assessment, Mark
from grading.models import GradeBand
from grading.services import (
    resolve_grade, compute_course_percent, aggregate_gpa, course_percent,
    compute_gpa, student_transcript, course_results, rank_course_percents,
    GpaEntry, GpaScope, ALL_SEMESTERS,
)
from grading.store import AssessmentRow, OfferingRow, Band, StudentRow, SemesterRow, GradeStore

User = get_user_model()

DEFAULT_BANDS = [
    Band(Decimal("90"), Decimal("100"), Decimal("10"), "A+"),
    Band(Decimal("80"), Decimal("89.99"), Decimal("9"), "A"),
    Band(Decimal("70"), Decimal("79.99"), Decimal("8"), "B+"),
    Band(Decimal("60"), Decimal("69.99"), Decimal("7"), "B"),
    Band(Decimal("50"), Decimal("59.99"), Decimal("6"), "C"),
    Band(Decimal("40"), Decimal("49.99"), Decimal("5"), "D"),
    Band(Decimal("0"), Decimal("39.99"), Decimal("0"), "F"),
]

CS101_ASSESSMENTS = [
    AssessmentRow(1, Decimal("20"), Decimal("10")),
    AssessmentRow(2, Decimal("20"), Decimal("10")),
    AssessmentRow(3, Decimal("10"), Decimal("10")),
    AssessmentRow(4, Decimal("50"), Decimal("70")),
]


class MemoryStore:
    """Store en mémoire, mêmes méthodes que GradeStore."""

    def __init__(self, offerings=(), assessments=None, marks=None, bands=DEFAULT_BANDS,
                 students=(), semesters=()):
        self._offerings = list(offerings)
        self._assessments = assessments or {}
        self._marks = marks or {}
        self._bands = list(bands)
        self._students = list(students)
        self._semesters = list(semesters)

    def offering(self, course_offering_id):
        return next((o for o in self._offerings if o.id == course_offering_id), None)

    def offerings(self, semester_id=None):
        return [o for o in self._offerings if semester_id is None or o.semester_id == semester_id]

    def assessments_for(self, course_offering_id):
        return list(self._assessments.get(course_offering_id, []))

    def marks_for(self, student_id, assessment_ids):
        return {
            aid: self._marks[(student_id, aid)]
            for aid in assessment_ids if (student_id, aid) in self._marks
        }

    def grade_bands(self):
        return list(self._bands)

    def students(self):
        return list(self._students)

    def semesters(self):
        return list(self._semesters)


class ResolveGradeTests(SimpleTestCase):
    def test_band_bounds_are_inclusive(self):
        for band in DEFAULT_BANDS:
            for value in (band.min_percent, band.max_percent):
                grade = resolve_grade(value, DEFAULT_BANDS)
                self.assertEqual(grade.letter, band.grade_letter)
                self.assertEqual(grade.point, band.grade_point)

    def test_value_inside_band(self):
        grade = resolve_grade(72.5, DEFAULT_BANDS)
        self.assertEqual((grade.point, grade.letter), (Decimal("8"), "B+"))

    def test_gap_between_bands_falls_back_to_f(self):
        grade = resolve_grade(Decimal("79.995"), DEFAULT_BANDS)
        self.assertEqual((grade.point, grade.letter), (Decimal("0"), "F"))

    def test_out_of_range_falls_back_to_f(self):
        for value in (100.5, -1, float("nan")):
            grade = resolve_grade(value, DEFAULT_BANDS)
            self.assertEqual(grade.letter, "F")
            self.assertEqual(grade.point, 0)

    def test_empty_scale(self):
        self.assertEqual(resolve_grade(95, []).letter, "F")

    def test_first_matching_band_wins(self):
        bands = [Band(50, 100, 9, "P"), Band(0, 60, 1, "L")]
        self.assertEqual(resolve_grade(55, bands).letter, "P")


class CoursePercentTests(SimpleTestCase):
    def test_weighted_sum(self):
        marks = {1: 15, 2: 16, 3: 8, 4: 35}
        self.assertEqual(compute_course_percent(CS101_ASSESSMENTS, marks), Decimal("72.5"))

    def test_full_marks_contribute_the_weight(self):
        a = AssessmentRow(7, Decimal("40"), Decimal("25"))
        self.assertEqual(compute_course_percent([a], {7: 40}), Decimal("25"))

    def test_missing_mark_contributes_zero(self):
        self.assertEqual(compute_course_percent(CS101_ASSESSMENTS, {}), 0)
        self.assertEqual(compute_course_percent(CS101_ASSESSMENTS, {4: 50}), Decimal("70"))

    def test_contributions_are_additive(self):
        marks = {1: 15, 2: 16, 3: 8, 4: 35}
        total = compute_course_percent(CS101_ASSESSMENTS, marks)
        without_final = dict(marks)
        del without_final[4]
        final_only = compute_course_percent([CS101_ASSESSMENTS[3]], {4: 35})
        self.assertEqual(compute_course_percent(CS101_ASSESSMENTS, without_final), total - final_only)

    def test_marks_above_max_are_not_clamped(self):
        a = AssessmentRow(1, Decimal("10"), Decimal("100"))
        self.assertEqual(compute_course_percent([a], {1: 12}), Decimal("120"))

    def test_weights_are_not_normalized(self):
        a = AssessmentRow(1, Decimal("10"), Decimal("40"))
        self.assertEqual(compute_course_percent([a], {1: 10}), Decimal("40"))

    def test_zero_max_marks_counts_as_zero(self):
        rows = [AssessmentRow(1, Decimal("0"), Decimal("50")), AssessmentRow(2, Decimal("10"), Decimal("50"))]
        with self.assertLogs("grading.services", level="WARNING"):
            percent = compute_course_percent(rows, {1: 5, 2: 10})
        self.assertEqual(percent, Decimal("50"))

    def test_float_inputs(self):
        a = AssessmentRow(1, 20.0, 10.0)
        self.assertEqual(compute_course_percent([a], {1: 15.0}), Decimal("7.5"))


class AggregateGpaTests(SimpleTestCase):
    def test_empty(self):
        result = aggregate_gpa([])
        self.assertEqual((result.gpa, result.total_credits), (0, 0))

    def test_zero_credits(self):
        result = aggregate_gpa([GpaEntry(Decimal("9"), Decimal("0"))])
        self.assertEqual((result.gpa, result.total_credits), (0, 0))

    def test_credit_weighted(self):
        result = aggregate_gpa([GpaEntry(Decimal("8"), Decimal("4")), GpaEntry(Decimal("9"), Decimal("3"))])
        self.assertAlmostEqual(float(result.gpa), 59 / 7, places=6)
        self.assertEqual(result.total_credits, Decimal("7"))

    def test_credits_weigh_proportionally(self):
        result = aggregate_gpa([GpaEntry(10, 3), GpaEntry(0, 1)])
        self.assertEqual(result.gpa, Decimal("7.5"))


class ComputeGpaTests(SimpleTestCase):
    def setUp(self):
        # offering 1: CS101 (4 crédits), 2: note unique (3 crédits), 3: sans épreuve, 4: autre semestre
        self.store = MemoryStore(
            offerings=[
                OfferingRow(1, Decimal("4"), 1),
                OfferingRow(2, Decimal("3"), 1),
                OfferingRow(3, Decimal("5"), 1),
                OfferingRow(4, Decimal("4"), 2),
            ],
            assessments={
                1: CS101_ASSESSMENTS,
                2: [AssessmentRow(10, Decimal("100"), Decimal("100"))],
                4: [AssessmentRow(20, Decimal("50"), Decimal("100"))],
            },
            marks={(4, 1): 15, (4, 2): 16, (4, 3): 8, (4, 4): 35, (4, 10): 85},
            students=[StudentRow(4, "s_ankit", "Ankit Sharma"), StudentRow(5, "s_ria", "Ria Gupta")],
            semesters=[SemesterRow(1, "Sem 1", 1), SemesterRow(2, "Sem 2", 2)],
        )

    def test_course_percent_through_store(self):
        self.assertEqual(course_percent(self.store, 1, 4), Decimal("72.5"))

    def test_semester_gpa_skips_offerings_without_assessments(self):
        result = compute_gpa(self.store, 4, GpaScope.semester(1))
        self.assertAlmostEqual(float(result.gpa), 59 / 7, places=6)
        self.assertEqual(result.total_credits, Decimal("7"))

    def test_cgpa_counts_ungraded_offerings_as_f(self):
        result = compute_gpa(self.store, 4, ALL_SEMESTERS)
        self.assertEqual(result.total_credits, Decimal("11"))
        self.assertAlmostEqual(float(result.gpa), 59 / 11, places=6)

    def test_student_without_marks(self):
        result = compute_gpa(self.store, 5, ALL_SEMESTERS)
        self.assertEqual(result.gpa, 0)
        self.assertEqual(result.total_credits, Decimal("11"))

    def test_empty_semester(self):
        result = compute_gpa(self.store, 4, GpaScope.semester(99))
        self.assertEqual((result.gpa, result.total_credits), (0, 0))

    def test_transcript_groups_by_semester(self):
        data = student_transcript(self.store, 4)
        self.assertEqual([s["semester"]["id"] for s in data["semesters"]], [1, 2])
        sem1, sem2 = data["semesters"]
        self.assertEqual([c["course_offering_id"] for c in sem1["courses"]], [1, 2])
        self.assertAlmostEqual(sem1["gpa"], 59 / 7, places=6)
        self.assertEqual(sem2["courses"][0]["grade_letter"], "F")
        self.assertAlmostEqual(data["cgpa"], 59 / 11, places=6)
        self.assertEqual(data["total_credits"], 11.0)

    def test_transcript_survives_offering_added_mid_read(self):
        calls = []
        read_offerings = self.store.offerings

        def offerings(semester_id=None):
            rows = read_offerings(semester_id)
            # une offering notée apparaît juste après la lecture
            new_id = 100 + len(calls)
            self.store._offerings.append(OfferingRow(new_id, Decimal("2"), 2))
            self.store._assessments[new_id] = [AssessmentRow(200 + new_id, Decimal("10"), Decimal("100"))]
            calls.append(semester_id)
            return rows

        self.store.offerings = offerings
        data = student_transcript(self.store, 4)
        self.assertEqual(len(calls), 1)
        self.assertEqual(data["total_credits"], 11.0)
        self.assertAlmostEqual(data["cgpa"], 59 / 11, places=6)

    def test_course_results_ranked(self):
        data = course_results(self.store, self.store.offering(1))
        self.assertEqual(data["count"], 2)
        first, second = data["results"]
        self.assertEqual((first["student"]["id"], first["rank"], first["grade_letter"]), (4, 1, "B+"))
        self.assertEqual((second["student"]["id"], second["rank"], second["grade_letter"]), (5, 2, "F"))
        self.assertEqual(data["class_avg"], 36.25)


class RankCoursePercentsTests(SimpleTestCase):
    def test_ties_share_rank(self):
        ranks, avg = rank_course_percents({"a": 80, "b": 90, "c": 80, "d": 70})
        self.assertEqual(ranks, {"b": 1, "a": 2, "c": 2, "d": 4})
        self.assertEqual(avg, 80.0)

    def test_empty(self):
        self.assertEqual(rank_course_percents({}), ({}, 0.0))


class GradeStoreTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = User.objects.create_user(username="s_ankit", role="student", name="Ankit")
        cls.other = User.objects.create_user(username="s_ria", role="student", name="Ria")
        sem = Semester.objects.create(name="Sem 1", ordinal=1)
        subject = Subject.objects.create(code="CS101", title="Intro", credits=4)
        cls.offering = CourseOffering.objects.create(subject=subject, semester=sem)
        cls.a1 = Assessment.objects.create(course_offering=cls.offering, name="T1", max_marks=20, weight_percent=10)
        cls.a2 = Assessment.objects.create(course_offering=cls.offering, name="T2", max_marks=20, weight_percent=10)
        Mark.objects.create(assessment=cls.a1, student=cls.student, marks_obtained=15)
        Mark.objects.create(assessment=cls.a2, student=cls.other, marks_obtained=11)

    def test_seeded_scale(self):
        bands = GradeStore().grade_bands()
        self.assertEqual([b.grade_letter for b in bands], ["A+", "A", "B+", "B", "C", "D", "F"])

    def test_marks_restricted_to_student_and_ids(self):
        store = GradeStore()
        self.assertEqual(store.marks_for(self.student.id, [self.a1.id, self.a2.id]), {self.a1.id: Decimal("15")})
        self.assertEqual(store.marks_for(self.student.id, [self.a2.id]), {})
        self.assertEqual(store.marks_for(self.student.id, []), {})

    def test_offering_rows(self):
        store = GradeStore()
        row = store.offering(self.offering.id)
        self.assertEqual(row.credits, Decimal("4"))
        self.assertEqual([o.id for o in store.offerings(semester_id=row.semester_id)], [self.offering.id])
        self.assertIsNone(store.offering(9999))

    def test_students(self):
        self.assertEqual({s.username for s in GradeStore().students()}, {"s_ankit", "s_ria"})


class GradeApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = User.objects.create_user(username="s_ankit", role="student", name="Ankit Sharma")
        cls.idle = User.objects.create_user(username="s_idle", role="student", name="Idle")
        cls.sem1 = Semester.objects.create(name="Sem 1 2025", ordinal=1)
        cls.sem2 = Semester.objects.create(name="Sem 2 2025", ordinal=2)
        cs101 = Subject.objects.create(code="CS101", title="Intro to Programming", credits=4)
        ma101 = Subject.objects.create(code="MA101", title="Calculus", credits=3)
        cs201 = Subject.objects.create(code="CS201", title="Algorithms", credits=4)
        cls.co1 = CourseOffering.objects.create(subject=cs101, semester=cls.sem1)
        cls.co2 = CourseOffering.objects.create(subject=ma101, semester=cls.sem1)
        cls.co3 = CourseOffering.objects.create(subject=cs201, semester=cls.sem2)
        values = [(20, 10, 15), (20, 10, 16), (10, 10, 8), (50, 70, 35)]
        for i, (max_marks, weight, obtained) in enumerate(values):
            a = Assessment.objects.create(course_offering=cls.co1, name=f"A{i}", max_marks=max_marks,
                                          weight_percent=weight)
            Mark.objects.create(assessment=a, student=cls.student, marks_obtained=obtained)
        ma = Assessment.objects.create(course_offering=cls.co2, name="Final", max_marks=100, weight_percent=100)
        Mark.objects.create(assessment=ma, student=cls.student, marks_obtained=85)
        # co3: épreuve sans note -> F dans le CGPA
        Assessment.objects.create(course_offering=cls.co3, name="Final", max_marks=100, weight_percent=100)

    def test_course_summary(self):
        r = self.client.get(f"/api/student/{self.student.id}/course/{self.co1.id}/summary/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"course_percent": 72.5, "grade_point": 8.0, "grade_letter": "B+", "credits": 4.0})

    def test_semester_gpa(self):
        r = self.client.get(f"/api/student/{self.student.id}/semester/{self.sem1.id}/gpa/")
        self.assertEqual(r.status_code, 200)
        self.assertAlmostEqual(r.json()["gpa"], 59 / 7, places=6)
        self.assertEqual(r.json()["total_credits"], 7.0)

    def test_cgpa_includes_ungraded_offering(self):
        r = self.client.get(f"/api/student/{self.student.id}/cgpa/")
        self.assertEqual(r.status_code, 200)
        self.assertAlmostEqual(r.json()["cgpa"], 59 / 11, places=6)
        self.assertEqual(r.json()["total_credits"], 11.0)

    def test_cgpa_student_without_marks(self):
        r = self.client.get(f"/api/student/{self.idle.id}/cgpa/")
        self.assertEqual(r.json(), {"cgpa": 0.0, "total_credits": 11.0})

    def test_mark_update_changes_result(self):
        ma = Assessment.objects.get(course_offering=self.co2)
        Mark.objects.filter(assessment=ma).update(marks_obtained=120)
        r = self.client.get(f"/api/student/{self.student.id}/course/{self.co2.id}/summary/")
        self.assertEqual(r.json()["course_percent"], 120.0)
        self.assertEqual(r.json()["grade_letter"], "F")

    def test_unknown_ids(self):
        self.assertEqual(self.client.get("/api/student/9999/cgpa/").status_code, 404)
        self.assertEqual(self.client.get(f"/api/student/{self.student.id}/course/9999/summary/").status_code, 404)
        self.assertEqual(self.client.get(f"/api/student/{self.student.id}/semester/9999/gpa/").status_code, 404)

    def test_transcript(self):
        r = self.client.get(f"/api/student/{self.student.id}/transcript/")
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual([s["semester"]["name"] for s in data["semesters"]], ["Sem 1 2025", "Sem 2 2025"])
        self.assertAlmostEqual(data["cgpa"], 59 / 11, places=6)

    def test_course_results(self):
        r = self.client.get(f"/api/course_offerings/{self.co1.id}/results/")
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(data["count"], 2)
        self.assertEqual(data["results"][0]["student"]["username"], "s_ankit")
        self.assertEqual(data["results"][0]["rank"], 1)
        self.assertEqual(data["results"][1]["grade_letter"], "F")

    def test_resolve_grade_endpoint(self):
        r = self.client.get("/api/grade/", {"percent": "72.5"})
        self.assertEqual(r.json(), {"grade_point": 8.0, "grade_letter": "B+"})
        r = self.client.get("/api/grade/", {"percent": "150"})
        self.assertEqual(r.json(), {"grade_point": 0.0, "grade_letter": "F"})
        self.assertEqual(self.client.get("/api/grade/", {"percent": "abc"}).status_code, 400)

    def test_grade_scale_listing(self):
        r = self.client.get("/api/grade-scale/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(len(r.json()), GradeBand.objects.count())
        self.assertEqual(r.json()[0]["grade_letter"], "A+")
