from django.contrib import admin
from .models import Subject, CourseOffering
# Register your models here.

@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ("code", "title", "credits")
    search_fields = ("code", "title")

@admin.register(CourseOffering)
class CourseOfferingAdmin(admin.ModelAdmin):
    list_display = ("subject", "semester", "teacher")
    list_filter  = ("semester",)
    search_fields = ("subject__code", "subject__title", "teacher__name")
