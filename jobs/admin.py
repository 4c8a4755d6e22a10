from django.contrib import admin
from .models import Job


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'employer', 'hourly_rate_min', 'hourly_rate_max', 'availability_hours', 'is_active', 'created_at')
    list_filter = ('is_active', 'created_at', 'skills')
    search_fields = ('title', 'description', 'employer__company_name')
    filter_horizontal = ('skills',)
    readonly_fields = ('created_at', 'updated_at')
    actions = ['deactivate_jobs']

    def deactivate_jobs(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} job(s) deactivated.")
    deactivate_jobs.short_description = "Deactivate selected jobs"
