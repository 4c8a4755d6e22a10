# jobs/forms.py
from decimal import Decimal

from django import forms

from core.constants import COUNTRY_CHOICES, JOB_SORT_CHOICES, JOB_SORT_NEWEST, RATE_SCALE_MAX, RATE_SCALE_MIN
from core.forms import PaginationForm, SkillListField, clean_or_raise

DEFAULT_RATE_MIN = Decimal(RATE_SCALE_MIN)
DEFAULT_RATE_MAX = Decimal(RATE_SCALE_MAX)
DEFAULT_HOURS = 8


class JobForm(forms.Form):
    title = forms.CharField(
        max_length=200,
        min_length=10,
        error_messages={'min_length': "Title must be at least 10 characters."},
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    description = forms.CharField(
        min_length=50,
        error_messages={'min_length': "Description must be at least 50 characters."},
        widget=forms.Textarea(attrs={'rows': 6}),
    )
    skills = SkillListField(min_count=1, error_messages={'required': "Select at least 1 skill."})
    hourly_rate_min = forms.DecimalField(required=False, min_value=0, max_digits=6, decimal_places=2)
    hourly_rate_max = forms.DecimalField(required=False, min_value=0, max_digits=6, decimal_places=2)
    availability_hours = forms.IntegerField(required=False, min_value=1, max_value=12)
    country_preference = forms.ChoiceField(choices=(('', 'Any country'),) + COUNTRY_CHOICES, required=False)

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('hourly_rate_min') is None:
            cleaned_data['hourly_rate_min'] = DEFAULT_RATE_MIN
        if cleaned_data.get('hourly_rate_max') is None:
            cleaned_data['hourly_rate_max'] = DEFAULT_RATE_MAX
        if cleaned_data.get('availability_hours') is None:
            cleaned_data['availability_hours'] = DEFAULT_HOURS
        if not cleaned_data.get('country_preference'):
            cleaned_data['country_preference'] = None

        if 'hourly_rate_min' not in self.errors and 'hourly_rate_max' not in self.errors:
            if cleaned_data['hourly_rate_min'] >= cleaned_data['hourly_rate_max']:
                raise forms.ValidationError("Minimum rate must be less than maximum rate.")
        return cleaned_data

    def job_fields(self):
        """Validated fields ready for MarketplaceStore.create_job()."""
        data = clean_or_raise(self)
        return {
            'title': data['title'],
            'description': data['description'],
            'skills': frozenset(data['skills']),
            'hourly_rate_min': data['hourly_rate_min'],
            'hourly_rate_max': data['hourly_rate_max'],
            'availability_hours': data['availability_hours'],
            'country_preference': data['country_preference'],
        }


class JobFilterForm(PaginationForm):
    search = forms.CharField(required=False, max_length=200)
    skill = forms.CharField(required=False, max_length=100)
    sort = forms.ChoiceField(choices=JOB_SORT_CHOICES, required=False)

    def query_params(self, default_limit=None):
        limit, offset = self.page(default_limit)
        data = self.cleaned_data
        return {
            'search': data.get('search', ''),
            'skill': data.get('skill') or None,
            'sort': data.get('sort') or JOB_SORT_NEWEST,
            'limit': limit,
            'offset': offset,
        }
