"""
Accès lecture seule aux données utilisées par le calcul des notes.

Les fonctions de grading.services ne touchent jamais l'ORM directement:
elles reçoivent un objet "store" qui expose les méthodes ci-dessous.
GradeStore est l'implémentation Django; les tests passent un store en mémoire.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from django.contrib.auth import get_user_model

from core.models import Semester
from subjects.models import CourseOffering
from assessments.models import Assessment, Mark
from grading.models import GradeBand


@dataclass(frozen=True)
class AssessmentRow:
    id: int
    max_marks: Decimal
    weight_percent: Decimal


@dataclass(frozen=True)
class OfferingRow:
    id: int
    credits: Decimal
    semester_id: Optional[int] = None


@dataclass(frozen=True)
class Band:
    min_percent: Decimal
    max_percent: Decimal
    grade_point: Decimal
    grade_letter: str


@dataclass(frozen=True)
class StudentRow:
    id: int
    username: str
    name: str


@dataclass(frozen=True)
class SemesterRow:
    id: int
    name: str
    ordinal: Optional[int] = None


class GradeStore:

    def offering(self, course_offering_id: int) -> Optional[OfferingRow]:
        row = (CourseOffering.objects
               .filter(id=course_offering_id)
               .values("id", "subject__credits", "semester_id")
               .first())
        if row is None:
            return None
        return OfferingRow(row["id"], row["subject__credits"], row["semester_id"])

    def offerings(self, semester_id: Optional[int] = None) -> List[OfferingRow]:
        qs = CourseOffering.objects.all()
        if semester_id is not None:
            qs = qs.filter(semester_id=semester_id)
        return [
            OfferingRow(r["id"], r["subject__credits"], r["semester_id"])
            for r in qs.values("id", "subject__credits", "semester_id")
        ]

    def assessments_for(self, course_offering_id: int) -> List[AssessmentRow]:
        qs = (Assessment.objects
              .filter(course_offering_id=course_offering_id)
              .values("id", "max_marks", "weight_percent"))
        return [AssessmentRow(r["id"], r["max_marks"], r["weight_percent"]) for r in qs]

    def marks_for(self, student_id: int, assessment_ids: Iterable[int]) -> Dict[int, Decimal]:
        ids = list(assessment_ids)
        if not ids:
            return {}
        rows = (Mark.objects
                .filter(student_id=student_id, assessment_id__in=ids)
                .values_list("assessment_id", "marks_obtained"))
        return dict(rows)

    def grade_bands(self) -> List[Band]:
        return [
            Band(b.min_percent, b.max_percent, b.grade_point, b.grade_letter)
            for b in GradeBand.objects.all()
        ]

    def students(self) -> List[StudentRow]:
        User = get_user_model()
        qs = User.objects.filter(role=User.Role.STUDENT).values("id", "username", "name")
        return [StudentRow(r["id"], r["username"], r["name"]) for r in qs]

    def semesters(self) -> List[SemesterRow]:
        return [
            SemesterRow(r["id"], r["name"], r["ordinal"])
            for r in Semester.objects.values("id", "name", "ordinal")
        ]
