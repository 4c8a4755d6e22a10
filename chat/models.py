# chat/models.py
from django.db import models
from django.conf import settings


class Conversation(models.Model):
    """
    The messaging thread between one worker and one employer.
    Only one conversation may exist per worker-employer pair.
    """
    worker = models.ForeignKey(
        'users.WorkerProfile',
        on_delete=models.CASCADE,
        related_name='conversations'
    )
    employer = models.ForeignKey(
        'users.EmployerProfile',
        on_delete=models.CASCADE,
        related_name='conversations'
    )
    last_message = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_message_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-last_message_at', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['worker', 'employer'], name='unique_conversation_per_pair'),
        ]

    def __str__(self):
        return f"Chat: {self.employer} ↔ {self.worker}"

    def unread_count(self, user):
        """Get unread message count for a specific user"""
        return self.messages.filter(is_read=False).exclude(sender=user).count()


class Message(models.Model):
    """
    Individual messages within a conversation. Append-only.
    """
    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name='messages'
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_messages'
    )
    content = models.TextField(max_length=2000)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    is_read = models.BooleanField(default=False)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.sender}: {self.content[:50]}"
