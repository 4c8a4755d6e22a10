# jobs/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F, Q
from decimal import Decimal


class Job(models.Model):
    employer = models.ForeignKey(
        'users.EmployerProfile',
        on_delete=models.CASCADE,
        related_name='jobs'
    )
    title = models.CharField(max_length=200)
    description = models.TextField()
    skills = models.ManyToManyField('workers.Skill', blank=True, related_name='jobs')
    hourly_rate_min = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    hourly_rate_max = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    availability_hours = models.PositiveSmallIntegerField(
        default=8,
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    country_preference = models.CharField(max_length=100, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', 'id']
        indexes = [
            models.Index(fields=['is_active', 'created_at']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(hourly_rate_min__lte=F('hourly_rate_max')),
                name='job_rate_min_lte_max',
            ),
        ]

    def __str__(self):
        return f"Job #{self.pk}: {self.title}"
