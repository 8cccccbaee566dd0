from django.contrib import admin
from .models import GradeBand
# Register your models here.

@admin.register(GradeBand)
class GradeBandAdmin(admin.ModelAdmin):
    list_display = ("grade_letter", "min_percent", "max_percent", "grade_point")
