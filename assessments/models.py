from decimal import Decimal
from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from subjects.models import CourseOffering

# Create your models here.

class Assessment(models.Model):
    course_offering = models.ForeignKey(CourseOffering, on_delete=models.CASCADE, related_name="assessments")
    name = models.CharField(max_length=64)  # ex: Internal Test 1, Final Exam
    max_marks = models.DecimalField(max_digits=7, decimal_places=2,
                                    validators=[MinValueValidator(Decimal("0.01"))])
    # part de la note finale; la somme par offering n'est pas imposée à 100
    weight_percent = models.DecimalField(max_digits=5, decimal_places=2,
                                         validators=[MinValueValidator(0), MaxValueValidator(100)])

    class Meta:
        ordering = ["course_offering", "id"]

    def __str__(self):
        return f"{self.course_offering} | {self.name} (/{self.max_marks}, {self.weight_percent}%)"

class Mark(models.Model):
    assessment = models.ForeignKey(Assessment, on_delete=models.CASCADE, related_name="marks")
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="marks")
    # peut dépasser max_marks: pas de plafond
    marks_obtained = models.DecimalField(max_digits=7, decimal_places=2)
    recorded_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("assessment", "student"),)
        ordering = ["assessment", "student"]

    def __str__(self):
        return f"{self.student} -> {self.assessment.name}: {self.marks_obtained}"
