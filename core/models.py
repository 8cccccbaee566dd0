from django.db import models

# Create your models here.
class Semester(models.Model):
    """
    Exemple de nom: 'Sem 1 2025'
    """
    name = models.CharField(max_length=64)
    ordinal = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        ordering = ["ordinal", "id"]

    def __str__(self):
        return self.name
