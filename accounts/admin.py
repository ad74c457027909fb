"""
Accounts Admin - Admin configuration for accounts and developer profiles.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import DeveloperProfile, User


class DeveloperProfileInline(admin.StackedInline):
    model = DeveloperProfile
    can_delete = False
    extra = 0
    readonly_fields = ['uuid', 'created_at', 'updated_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'username', 'full_name', 'role', 'is_active', 'created_at']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['email', 'username', 'full_name']
    ordering = ['-created_at']
    readonly_fields = ['uuid', 'created_at', 'updated_at', 'last_login', 'date_joined']
    inlines = [DeveloperProfileInline]

    fieldsets = (
        (None, {'fields': ('uuid', 'email', 'username', 'password')}),
        ('Profile', {'fields': ('full_name', 'role', 'profile_picture', 'bio', 'location')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Dates', {'fields': ('last_login', 'date_joined', 'created_at', 'updated_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'full_name', 'role', 'password1', 'password2'),
        }),
    )


@admin.register(DeveloperProfile)
class DeveloperProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'experience', 'availability', 'hourly_rate', 'rating', 'completed_projects']
    list_filter = ['experience', 'availability']
    search_fields = ['user__email', 'user__username', 'user__full_name']
    raw_id_fields = ['user']
    readonly_fields = ['uuid', 'created_at', 'updated_at']
