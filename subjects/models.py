from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from core.models import Semester

# Create your models here.

class Subject(models.Model):
    code = models.CharField(max_length=16, unique=True)
    title = models.CharField(max_length=128)
    credits = models.DecimalField(max_digits=5, decimal_places=2, default=0, validators=[MinValueValidator(0)])

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.title} [{self.code}]"

class CourseOffering(models.Model):
    subject  = models.ForeignKey(Subject,  on_delete=models.PROTECT, related_name="offerings")
    semester = models.ForeignKey(Semester, on_delete=models.PROTECT, related_name="offerings")
    teacher  = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name="taught_offerings")

    class Meta:
        ordering = ["semester__ordinal", "id"]

    def __str__(self):
        return f"{self.subject.code} - {self.semester}"
