# workers/forms.py
from decimal import Decimal

from django import forms

from core.constants import (
    HOURS_SCALE_MAX,
    HOURS_SCALE_MIN,
    LAST_ACTIVE_ANY,
    LAST_ACTIVE_CHOICES,
    RATE_SCALE_MAX,
    RATE_SCALE_MIN,
    RATE_STEP,
)
from core.forms import SkillListField, clean_or_raise

from .filters import FilterState


class WorkerFilterForm(forms.Form):
    """Sidebar filters of the worker directory, parsed from query parameters."""

    search = forms.CharField(required=False, max_length=200)
    country = forms.CharField(required=False, max_length=10)
    min_rate = forms.DecimalField(
        required=False,
        min_value=RATE_SCALE_MIN,
        max_value=RATE_SCALE_MAX,
        step_size=Decimal(RATE_STEP),
        widget=forms.NumberInput(attrs={'step': RATE_STEP}),
    )
    max_rate = forms.DecimalField(
        required=False,
        min_value=RATE_SCALE_MIN,
        max_value=RATE_SCALE_MAX,
        step_size=Decimal(RATE_STEP),
        widget=forms.NumberInput(attrs={'step': RATE_STEP}),
    )
    min_hours = forms.IntegerField(required=False, min_value=HOURS_SCALE_MIN, max_value=HOURS_SCALE_MAX)
    max_hours = forms.IntegerField(required=False, min_value=HOURS_SCALE_MIN, max_value=HOURS_SCALE_MAX)
    verified = forms.BooleanField(required=False)
    last_active = forms.ChoiceField(choices=LAST_ACTIVE_CHOICES, required=False)
    skills = SkillListField(required=False)

    def to_filter_state(self):
        """Raises core.exceptions.ValidationError when a parameter cannot be parsed."""
        data = clean_or_raise(self)
        defaults = FilterState()

        def pick(name, default):
            value = data.get(name)
            return default if value in (None, '') else value

        return FilterState(
            search=data.get('search', ''),
            country=data.get('country') or defaults.country,
            min_rate=pick('min_rate', defaults.min_rate),
            max_rate=pick('max_rate', defaults.max_rate),
            min_hours=pick('min_hours', defaults.min_hours),
            max_hours=pick('max_hours', defaults.max_hours),
            verified_only=bool(data.get('verified')),
            last_active=data.get('last_active') or LAST_ACTIVE_ANY,
            skills=data.get('skills') or (),
        )
