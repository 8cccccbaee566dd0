from django.db import models
from django.contrib.auth.models import AbstractUser
# Create your models here.

class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = "admin"
        TEACHER = "teacher"
        STUDENT = "student"
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STUDENT)
    name = models.CharField(max_length=128, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name or self.username
