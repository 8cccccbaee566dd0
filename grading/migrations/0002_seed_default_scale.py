from decimal import Decimal
from django.db import migrations

BANDS = [
    ("A+", "90", "100", 10),
    ("A", "80", "89.99", 9),
    ("B+", "70", "79.99", 8),
    ("B", "60", "69.99", 7),
    ("C", "50", "59.99", 6),
    ("D", "40", "49.99", 5),
    ("F", "0", "39.99", 0),
]

def seed(apps, schema_editor):
    GradeBand = apps.get_model("grading", "GradeBand")
    for letter, lo, hi, point in BANDS:
        GradeBand.objects.get_or_create(
            grade_letter=letter,
            defaults={"min_percent": Decimal(lo), "max_percent": Decimal(hi), "grade_point": point}
        )

def unseed(apps, schema_editor):
    GradeBand = apps.get_model("grading", "GradeBand")
    GradeBand.objects.filter(grade_letter__in=[b[0] for b in BANDS]).delete()

class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed, reverse_code=unseed),
    ]
