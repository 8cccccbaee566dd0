import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from core.models import Semester
from subjects.models import Subject, CourseOffering
from assessments.models import Assessment, Mark

logger = logging.getLogger(__name__)

User = get_user_model()

USERS = [
    ("admin", User.Role.ADMIN, "Administrator"),
    ("t_alex", User.Role.TEACHER, "Prof. Alex"),
    ("t_maya", User.Role.TEACHER, "Prof. Maya"),
    ("s_ankit", User.Role.STUDENT, "Ankit Sharma"),
    ("s_ria", User.Role.STUDENT, "Ria Gupta"),
]

SEMESTERS = [("Sem 1 2025", 1), ("Sem 2 2025", 2)]

SUBJECTS = [
    ("CS101", "Intro to Programming", 4),
    ("CS102", "Data Structures", 4),
    ("MA101", "Calculus", 3),
]

# (subject code, semester name, teacher username)
OFFERINGS = [
    ("CS101", "Sem 1 2025", "t_alex"),
    ("CS102", "Sem 1 2025", "t_maya"),
    ("MA101", "Sem 1 2025", "t_alex"),
]

# subject code -> [(name, max_marks, weight_percent)]
ASSESSMENTS = {
    "CS101": [
        ("Internal Test 1", 20, 10),
        ("Internal Test 2", 20, 10),
        ("Viva", 10, 10),
        ("Final Exam", 50, 70),
    ],
    "CS102": [
        ("Internal Test", 30, 20),
        ("Final Exam", 70, 80),
    ],
}

# student username -> marks for the CS101 assessments, in order
CS101_MARKS = {
    "s_ankit": [15, 16, 8, 35],
    "s_ria": [17, 15, 9, 40],
}


class Command(BaseCommand):
    help = "Load the demo data set (users, semesters, subjects, offerings, assessments, marks)"

    def add_arguments(self, parser):
        parser.add_argument("--reset", action="store_true",
                            help="Delete existing records (except superusers) before seeding")

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            self._reset()

        users = {}
        for username, role, name in USERS:
            user, _ = User.objects.get_or_create(username=username, defaults={"role": role, "name": name})
            users[username] = user

        semesters = {}
        for name, ordinal in SEMESTERS:
            semesters[name], _ = Semester.objects.get_or_create(name=name, defaults={"ordinal": ordinal})

        subjects = {}
        for code, title, credits in SUBJECTS:
            subjects[code], _ = Subject.objects.get_or_create(
                code=code, defaults={"title": title, "credits": credits}
            )

        offerings = {}
        for code, semester_name, teacher in OFFERINGS:
            offerings[code], _ = CourseOffering.objects.get_or_create(
                subject=subjects[code], semester=semesters[semester_name],
                defaults={"teacher": users[teacher]},
            )

        assessments = {}
        for code, rows in ASSESSMENTS.items():
            assessments[code] = []
            for name, max_marks, weight in rows:
                a, _ = Assessment.objects.get_or_create(
                    course_offering=offerings[code], name=name,
                    defaults={"max_marks": max_marks, "weight_percent": weight},
                )
                assessments[code].append(a)

        for username, values in CS101_MARKS.items():
            for a, value in zip(assessments["CS101"], values):
                Mark.objects.get_or_create(
                    assessment=a, student=users[username], defaults={"marks_obtained": value}
                )

        logger.info(
            f"Demo data ready: {User.objects.count()} users, {CourseOffering.objects.count()} offerings, "
            f"{Assessment.objects.count()} assessments, {Mark.objects.count()} marks"
        )
        self.stdout.write(self.style.SUCCESS("Demo data loaded"))

    def _reset(self):
        Mark.objects.all().delete()
        Assessment.objects.all().delete()
        CourseOffering.objects.all().delete()
        Subject.objects.all().delete()
        Semester.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        logger.info("Existing records removed")
