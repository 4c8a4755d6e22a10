from django.contrib import admin
from .models import Skill, SavedWorker


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ('name',)
    search_fields = ('name',)


@admin.register(SavedWorker)
class SavedWorkerAdmin(admin.ModelAdmin):
    list_display = ('employer', 'worker', 'saved_at')
    list_filter = ('saved_at',)
    search_fields = ('employer__company_name', 'worker__name')
    readonly_fields = ('saved_at',)
