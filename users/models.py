from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

import uuid
from decimal import Decimal

from core.constants import AVAILABILITY_TYPE_CHOICES, EMPLOYER, FULL_TIME, USER_TYPE_CHOICES, WORKER


# ---------- USER MANAGER ----------
class UserManager(BaseUserManager):
    """Custom user manager that normalizes email.

    Use `create_user` and `create_superuser` as the canonical constructors.
    """

    def _create_user(self, email: str, password: str | None = None, **extra_fields):
        if not email:
            raise ValueError("The Email field must be set")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("user_type", User.EMPLOYER)

        if not extra_fields.get("is_staff"):
            raise ValueError("Superuser must have is_staff=True.")
        if not extra_fields.get("is_superuser"):
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


# ---------- USER MODEL ----------
class User(AbstractBaseUser, PermissionsMixin):
    """Account shared by both sides of the marketplace.

    - UUID primary key, exposed as an opaque string id.
    - Email is the unique identifier (USERNAME_FIELD).
    - `user_type` decides which profile row belongs to the account.
    """

    WORKER = WORKER
    EMPLOYER = EMPLOYER

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(_("email address"), unique=True, db_index=True)
    user_type = models.CharField(max_length=20, choices=USER_TYPE_CHOICES, default=WORKER, db_index=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    date_joined = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "users"
        verbose_name = _("user")
        verbose_name_plural = _("users")

    def __str__(self) -> str:
        return self.email

    @property
    def is_worker(self) -> bool:
        return self.user_type == self.WORKER

    @property
    def is_employer(self) -> bool:
        return self.user_type == self.EMPLOYER


# ---------- PROFILES ----------
class WorkerProfile(models.Model):
    """Public freelancer profile. Created at signup, edited only by its owner."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="worker_profile")
    name = models.CharField(max_length=120)
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    country = models.CharField(max_length=100, blank=True)
    country_code = models.CharField(max_length=2, blank=True, db_index=True)
    headline = models.CharField(max_length=200, blank=True)
    skills = models.ManyToManyField("workers.Skill", blank=True, related_name="workers")
    hourly_rate_min = models.DecimalField(
        max_digits=6, decimal_places=2, default=Decimal("1.00"), validators=[MinValueValidator(Decimal("0"))]
    )
    hourly_rate_max = models.DecimalField(
        max_digits=6, decimal_places=2, default=Decimal("3.00"), validators=[MinValueValidator(Decimal("0"))]
    )
    availability_hours = models.PositiveSmallIntegerField(
        default=8, validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    availability_type = models.CharField(max_length=20, choices=AVAILABILITY_TYPE_CHOICES, default=FULL_TIME)
    bio = models.TextField(blank=True)
    last_active = models.DateTimeField(default=timezone.now, db_index=True)
    is_verified = models.BooleanField(default=False)

    # Maintained by the review aggregation job, never recomputed here.
    review_count = models.PositiveIntegerField(default=0)
    average_rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "worker_profiles"
        ordering = ["-last_active", "id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(hourly_rate_min__lte=F("hourly_rate_max")),
                name="worker_rate_min_lte_max",
            ),
            models.CheckConstraint(
                condition=Q(availability_hours__gte=1, availability_hours__lte=12),
                name="worker_hours_1_to_12",
            ),
        ]

    def __str__(self) -> str:
        return self.name or self.user.email


class EmployerProfile(models.Model):
    """Company profile that posts jobs and contacts workers."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="employer_profile")
    company_name = models.CharField(max_length=150)
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    country = models.CharField(max_length=100, blank=True)
    country_code = models.CharField(max_length=2, blank=True)
    bio = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "employer_profiles"

    def __str__(self) -> str:
        return self.company_name or self.user.email
