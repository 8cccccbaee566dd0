from django.contrib import admin
from .models import Assessment, Mark
# Register your models here.

@admin.register(Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = ("course_offering", "name", "max_marks", "weight_percent")
    list_filter = ("course_offering__semester",)
    search_fields = ("name", "course_offering__subject__code")

@admin.register(Mark)
class MarkAdmin(admin.ModelAdmin):
    list_display = ("assessment", "student", "marks_obtained", "recorded_at")
    list_filter = ("assessment__course_offering__semester",)
    search_fields = ("student__username", "student__name", "assessment__name")
