import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

logger = logging.getLogger(__name__)

D0 = Decimal("0")


def _d(x):
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def _q2(x):
    return _d(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class GradeResult:
    point: Decimal
    letter: str


FAILING_GRADE = GradeResult(D0, "F")


@dataclass(frozen=True)
class GpaEntry:
    grade_point: Decimal
    credits: Decimal


@dataclass(frozen=True)
class GpaResult:
    gpa: Decimal
    total_credits: Decimal


@dataclass(frozen=True)
class CourseGrade:
    course_offering_id: int
    percent: Decimal
    point: Decimal
    letter: str
    credits: Decimal
    semester_id: Optional[int] = None


@dataclass(frozen=True)
class GpaScope:
    """
    Périmètre d'agrégation:
      - GpaScope.semester(id): offerings du semestre
      - ALL_SEMESTERS: toutes les offerings notables, tous semestres confondus.
        Sans modèle d'inscription, une offering sans note pour l'élève compte
        quand même (0% -> F).
    """
    semester_id: Optional[int] = None

    @classmethod
    def semester(cls, semester_id: int) -> "GpaScope":
        return cls(semester_id=semester_id)

    @property
    def is_all(self) -> bool:
        return self.semester_id is None


ALL_SEMESTERS = GpaScope()


# -------------------------
#  Calculs purs
# -------------------------

def resolve_grade(percent, bands) -> GradeResult:
    """Première bande telle que min <= percent <= max; sinon F / 0."""
    value = _d(percent)
    if not value.is_finite():
        return FAILING_GRADE
    for band in bands:
        if _d(band.min_percent) <= value <= _d(band.max_percent):
            return GradeResult(_d(band.grade_point), band.grade_letter)
    return FAILING_GRADE


def compute_course_percent(assessments, marks_by_assessment) -> Decimal:
    """
    Somme des contributions (obtenu / max) * poids.
    Note absente = 0. Pas de plafond ni de renormalisation des poids.
    """
    total = D0
    for a in assessments:
        max_marks = _d(a.max_marks)
        if max_marks <= D0:
            logger.warning(f"Assessment {a.id} has max_marks={max_marks}; counted as zero contribution")
            continue
        obtained = _d(marks_by_assessment.get(a.id, D0))
        total += (obtained / max_marks) * _d(a.weight_percent)
    return total


def aggregate_gpa(entries) -> GpaResult:
    weighted = D0
    total_credits = D0
    for e in entries:
        credits = _d(e.credits)
        weighted += _d(e.grade_point) * credits
        total_credits += credits
    if total_credits == D0:
        return GpaResult(D0, D0)
    return GpaResult(weighted / total_credits, total_credits)


# -------------------------
#  Calculs sur le store
# -------------------------

def course_percent(store, course_offering_id: int, student_id: int) -> Decimal:
    assessments = store.assessments_for(course_offering_id)
    marks = store.marks_for(student_id, [a.id for a in assessments])
    return compute_course_percent(assessments, marks)


def course_grade(store, offering, student_id: int, bands=None) -> CourseGrade:
    if bands is None:
        bands = store.grade_bands()
    percent = course_percent(store, offering.id, student_id)
    grade = resolve_grade(percent, bands)
    return CourseGrade(offering.id, percent, grade.point, grade.letter, _d(offering.credits),
                       offering.semester_id)


def _gradable_course_grades(store, student_id: int, scope: GpaScope, bands):
    """Une CourseGrade par offering du périmètre ayant au moins une épreuve."""
    grades = []
    for offering in store.offerings(semester_id=scope.semester_id):
        assessments = store.assessments_for(offering.id)
        if not assessments:
            # pas d'épreuve configurée -> ni numérateur ni dénominateur
            continue
        marks = store.marks_for(student_id, [a.id for a in assessments])
        percent = compute_course_percent(assessments, marks)
        grade = resolve_grade(percent, bands)
        logger.debug(
            f"student={student_id} offering={offering.id} percent={percent} grade={grade.letter}"
        )
        grades.append(CourseGrade(offering.id, percent, grade.point, grade.letter, _d(offering.credits),
                                  offering.semester_id))
    return grades


def compute_gpa(store, student_id: int, scope: GpaScope) -> GpaResult:
    bands = store.grade_bands()
    grades = _gradable_course_grades(store, student_id, scope, bands)
    result = aggregate_gpa(GpaEntry(g.point, g.credits) for g in grades)
    logger.debug(
        f"GPA student={student_id} scope={'all' if scope.is_all else scope.semester_id}: "
        f"{result.gpa} over {result.total_credits} credits"
    )
    return result


def student_transcript(store, student_id: int):
    """
    Relevé complet: GPA par semestre (avec le détail des cours) puis CGPA.
    Les cours sont calculés une seule fois et regroupés par semestre.
    """
    bands = store.grade_bands()
    grades = _gradable_course_grades(store, student_id, ALL_SEMESTERS, bands)

    by_semester = defaultdict(list)
    for g in grades:
        by_semester[g.semester_id].append(g)

    semesters = []
    for sem in store.semesters():
        sem_grades = by_semester.get(sem.id, [])
        gpa = aggregate_gpa(GpaEntry(g.point, g.credits) for g in sem_grades)
        semesters.append({
            "semester": {"id": sem.id, "name": sem.name, "ordinal": sem.ordinal},
            "courses": [
                {
                    "course_offering_id": g.course_offering_id,
                    "course_percent": float(g.percent),
                    "grade_point": float(g.point),
                    "grade_letter": g.letter,
                    "credits": float(g.credits),
                }
                for g in sem_grades
            ],
            "gpa": float(gpa.gpa),
            "total_credits": float(gpa.total_credits),
        })

    cgpa = aggregate_gpa(GpaEntry(g.point, g.credits) for g in grades)
    return {
        "student_id": student_id,
        "semesters": semesters,
        "cgpa": float(cgpa.gpa),
        "total_credits": float(cgpa.total_credits),
    }


def rank_course_percents(percent_by_student):
    """
    Classement "1, 1, 3" des pourcentages d'une offering, comparés à 2 décimales.
    Retourne ({student_id: rang}, moyenne de la classe arrondie à 2 décimales).
    """
    if not percent_by_student:
        return {}, 0.0

    rounded = {sid: _q2(p) for sid, p in percent_by_student.items()}

    # rang = première position occupée par la valeur dans l'ordre décroissant
    first_position = {}
    for position, value in enumerate(sorted(rounded.values(), reverse=True), start=1):
        first_position.setdefault(value, position)

    ranks = {sid: first_position[value] for sid, value in rounded.items()}
    class_avg = float(_q2(sum(rounded.values()) / len(rounded)))
    return ranks, class_avg


def course_results(store, offering):
    """
    Résultats de tous les élèves pour une offering (pas de modèle
    d'inscription: tous les élèves sont listés), classés par pourcentage.
    """
    bands = store.grade_bands()
    rows = {}
    for s in store.students():
        g = course_grade(store, offering, s.id, bands)
        rows[s.id] = {
            "student": {"id": s.id, "username": s.username, "name": s.name},
            "course_percent": float(g.percent),
            "grade_point": float(g.point),
            "grade_letter": g.letter,
            "_percent": g.percent,
        }

    rank_map, avg = rank_course_percents({k: r["_percent"] for k, r in rows.items()})
    results = sorted(rows.values(), key=lambda r: r["_percent"], reverse=True)
    for r in results:
        r["rank"] = rank_map[r["student"]["id"]]
        del r["_percent"]

    return {
        "course_offering_id": offering.id,
        "credits": float(_d(offering.credits)),
        "count": len(results),
        "class_avg": avg,
        "results": results,
    }
