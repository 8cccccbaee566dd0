from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User
# Register your models here.

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "name", "role", "is_staff")
    list_filter = ("role", "is_staff")
    search_fields = ("username", "name")
    fieldsets = BaseUserAdmin.fieldsets + (("Records", {"fields": ("role", "name")}),)
