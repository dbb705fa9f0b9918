"""
Django admin configuration for companies, jobs and applications.
"""

from django.contrib import admin

from companies.models import Application, Company, Job


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "email", "created_by", "created_at"]
    search_fields = ["name", "email", "created_by__email"]
    raw_id_fields = ["created_by"]
    filter_horizontal = ["hr_members"]


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "company", "added_by", "closed", "created_at"]
    list_filter = ["closed"]
    search_fields = ["title", "company__name"]
    raw_id_fields = ["company", "added_by"]


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ["id", "job", "applicant", "status", "reviewed_at", "created_at"]
    list_filter = ["status"]
    search_fields = ["applicant__email", "job__title"]
    raw_id_fields = ["job", "applicant", "reviewed_by"]
    readonly_fields = ["created_at", "updated_at", "reviewed_at"]
