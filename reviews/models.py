# reviews/models.py
from django.db import models


class Review(models.Model):
    worker = models.ForeignKey('users.WorkerProfile', on_delete=models.CASCADE, related_name='reviews')
    employer = models.ForeignKey('users.EmployerProfile', on_delete=models.CASCADE, related_name='reviews_given')
    rating = models.PositiveSmallIntegerField(choices=[(i, i) for i in range(1, 6)])  # 1 to 5 stars
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Review for {self.worker} by {self.employer} ({self.rating}/5)"
