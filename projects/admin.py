"""
Projects Admin - Admin configuration for client projects.
"""

from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'owner', 'category', 'status', 'budget_min', 'budget_max', 'deadline', 'created_at']
    list_filter = ['status', 'category', 'complexity', 'timeline']
    search_fields = ['title', 'description', 'owner__email', 'owner__username']
    raw_id_fields = ['owner', 'selected_developer']
    readonly_fields = ['uuid', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
