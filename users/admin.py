from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, WorkerProfile, EmployerProfile
import openpyxl
from django.http import HttpResponse
from datetime import datetime


def workbook_response(title, header, rows, filename):
    """Build an .xlsx attachment from a header row and data rows."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    ws.append(header)
    for row in rows:
        ws.append(row)

    response = HttpResponse(
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    response["Content-Disposition"] = f'attachment; filename={filename}'
    wb.save(response)
    return response


def export_users_to_excel(modeladmin, request, queryset):
    """
    Export selected users to an Excel file.
    """
    rows = (
        [user.email, user.get_user_type_display(), "Yes" if user.is_active else "No",
         user.date_joined.strftime("%Y-%m-%d %H:%M")]
        for user in queryset
    )
    filename = f"users_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return workbook_response("Users", ["Email", "Account Type", "Active", "Date Joined"], rows, filename)

export_users_to_excel.short_description = "📤 Export selected users to Excel"


def export_workers_to_excel(modeladmin, request, queryset):
    rows = (
        [worker.name, worker.user.email, worker.country, ", ".join(s.name for s in worker.skills.all()),
         float(worker.hourly_rate_min), float(worker.hourly_rate_max), worker.availability_hours,
         "Yes" if worker.is_verified else "No", worker.last_active.strftime("%Y-%m-%d %H:%M")]
        for worker in queryset.select_related("user").prefetch_related("skills")
    )
    header = ["Name", "Email", "Country", "Skills", "Rate Min", "Rate Max", "Hours/Day", "Verified", "Last Active"]
    filename = f"workers_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return workbook_response("Workers", header, rows, filename)

export_workers_to_excel.short_description = "📤 Export selected workers to Excel"


def export_emails(modeladmin, request, queryset):
    return workbook_response("Emails", ["Email"], ([user.email] for user in queryset), "emails.xlsx")
export_emails.short_description = "📧 Export Emails Only"


class WorkerProfileInline(admin.StackedInline):
    model = WorkerProfile
    can_delete = False
    filter_horizontal = ('skills',)
    readonly_fields = ('review_count', 'average_rating', 'last_active')


class EmployerProfileInline(admin.StackedInline):
    model = EmployerProfile
    can_delete = False


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    actions = [export_users_to_excel, export_emails]
    list_display = ('email', 'user_type', 'is_active', 'is_staff', 'date_joined')
    list_filter = ('user_type', 'is_active', 'is_staff', 'date_joined')
    search_fields = ('email',)
    ordering = ('-date_joined',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Role & Permissions', {'fields': ('user_type', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'user_type'),
        }),
    )

    readonly_fields = ('date_joined', 'last_login')

    def get_inlines(self, request, obj):
        if obj is None:
            return []
        return [EmployerProfileInline] if obj.is_employer else [WorkerProfileInline]


@admin.register(WorkerProfile)
class WorkerProfileAdmin(admin.ModelAdmin):
    actions = [export_workers_to_excel]

    list_display = ('name', 'user', 'country', 'hourly_rate_min', 'hourly_rate_max', 'availability_hours', 'is_verified', 'last_active')
    list_filter = ('is_verified', 'availability_type', 'country_code', 'skills')
    search_fields = ('name', 'headline', 'user__email')
    filter_horizontal = ('skills',)
    readonly_fields = ('review_count', 'average_rating', 'created_at', 'updated_at')


@admin.register(EmployerProfile)
class EmployerProfileAdmin(admin.ModelAdmin):
    list_display = ('company_name', 'user', 'country', 'created_at')
    list_filter = ('country_code', 'created_at')
    search_fields = ('company_name', 'user__email')
    readonly_fields = ('created_at', 'updated_at')
