from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, Division


# ───────────────────────────────
#  Division
# ───────────────────────────────
@admin.register(Division)
class DivisionAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


# ───────────────────────────────
#  User
# ───────────────────────────────
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "name", "role", "division", "is_staff")
    list_filter  = ("role", "division", "is_staff", "is_active")
    search_fields = ("username", "email", "name")
    ordering = ("-date_joined",)
    autocomplete_fields = ["division"]
    fieldsets = (
        (None, {"fields": ("username", "email", "password")}),
        ("Personal info", {"fields": ("name", "gender", "division")}),
        ("Permissions",   {"fields": ("is_active", "is_staff", "is_superuser", "role", "groups", "user_permissions")}),
        ("Dates",         {"fields": ("last_login", "date_joined")}),
    )
