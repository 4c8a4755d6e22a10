from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('worker', 'employer', 'rating', 'created_at')
    list_filter = ('rating', 'created_at')
    search_fields = ('worker__name', 'employer__company_name', 'comment')
    readonly_fields = ('created_at',)
