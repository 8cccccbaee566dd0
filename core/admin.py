from django.contrib import admin
from .models import Semester
from subjects.models import CourseOffering
# Register your models here.
class CourseOfferingInline(admin.TabularInline):
    model = CourseOffering
    extra = 1

@admin.register(Semester)
class SemesterAdmin(admin.ModelAdmin):
    list_display = ("name", "ordinal")
    search_fields = ("name",)
    inlines = [CourseOfferingInline]
