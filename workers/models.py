# workers/models.py
from django.db import models


class Skill(models.Model):
    """Catalogue entry shared by worker profiles and job postings."""
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class SavedWorker(models.Model):
    """An employer's bookmark of a worker profile. One row per pair."""
    employer = models.ForeignKey(
        'users.EmployerProfile',
        on_delete=models.CASCADE,
        related_name='saved_workers'
    )
    worker = models.ForeignKey(
        'users.WorkerProfile',
        on_delete=models.CASCADE,
        related_name='saved_by'
    )
    saved_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-saved_at']
        constraints = [
            models.UniqueConstraint(fields=['employer', 'worker'], name='unique_saved_worker_per_employer'),
        ]

    def __str__(self):
        return f"{self.employer} saved {self.worker}"
