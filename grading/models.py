from django.db import models
# Create your models here.

class GradeBand(models.Model):
    min_percent = models.DecimalField(max_digits=5, decimal_places=2)  # inclusif
    max_percent = models.DecimalField(max_digits=5, decimal_places=2)  # inclusif
    grade_point = models.DecimalField(max_digits=4, decimal_places=2, default=0)
    grade_letter = models.CharField(max_length=4, unique=True)  # A+, A, B+, ...

    class Meta:
        ordering = ["-min_percent"]

    def __str__(self):
        return f"{self.grade_letter}: {self.min_percent}-{self.max_percent} ({self.grade_point})"
