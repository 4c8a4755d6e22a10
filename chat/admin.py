from django.contrib import admin
from .models import Conversation, Message


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ('id', 'employer', 'worker', 'created_at', 'last_message_at')
    list_filter = ('created_at', 'last_message_at')
    search_fields = ('employer__company_name', 'worker__name')
    readonly_fields = ('created_at', 'last_message_at', 'last_message')


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'sender', 'conversation', 'created_at', 'is_read', 'content_preview')
    list_filter = ('created_at', 'is_read')
    search_fields = ('sender__email', 'content')
    readonly_fields = ('created_at',)

    def content_preview(self, obj):
        return obj.content[:50] + '...' if len(obj.content) > 50 else obj.content
    content_preview.short_description = 'Content'
