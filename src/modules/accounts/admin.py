from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from modules.accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ["username", "name", "email", "role", "is_active"]
    list_filter = ["role", "is_active", "is_staff"]
    search_fields = ["username", "name", "email"]
    fieldsets = BaseUserAdmin.fieldsets + (("Role", {"fields": ("name", "role")}),)
