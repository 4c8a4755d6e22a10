# users/forms.py
from django import forms

from core.constants import AVAILABILITY_TYPE_CHOICES, COUNTRY_CHOICES, FULL_TIME, country_name
from core.exceptions import ValidationError
from core.forms import SkillListField, clean_or_raise


class WorkerProfileForm(forms.Form):
    name = forms.CharField(
        max_length=120,
        min_length=2,
        error_messages={'min_length': "Name must be at least 2 characters."},
        widget=forms.TextInput(attrs={'class': 'form-input', 'placeholder': 'Full name'}),
    )
    headline = forms.CharField(
        max_length=200,
        min_length=10,
        error_messages={'min_length': "Headline must be at least 10 characters."},
        widget=forms.TextInput(attrs={'class': 'form-input', 'placeholder': 'e.g. Experienced Virtual Assistant'}),
    )
    country = forms.ChoiceField(choices=COUNTRY_CHOICES, error_messages={'required': "Country is required."})
    skills = SkillListField(min_count=1, error_messages={'required': "Select at least 1 skill."})
    hourly_rate_min = forms.DecimalField(min_value=0, max_digits=6, decimal_places=2)
    hourly_rate_max = forms.DecimalField(min_value=0, max_digits=6, decimal_places=2)
    availability_hours = forms.IntegerField(min_value=1, max_value=12)
    availability_type = forms.ChoiceField(choices=AVAILABILITY_TYPE_CHOICES, initial=FULL_TIME)
    bio = forms.CharField(
        min_length=50,
        error_messages={'min_length': "Bio must be at least 50 characters."},
        widget=forms.Textarea(attrs={'rows': 5}),
    )

    def clean(self):
        cleaned_data = super().clean()
        rate_min = cleaned_data.get('hourly_rate_min')
        rate_max = cleaned_data.get('hourly_rate_max')
        if rate_min is not None and rate_max is not None and rate_min >= rate_max:
            raise forms.ValidationError("Minimum rate must be less than maximum rate.")
        return cleaned_data

    @classmethod
    def initial_from(cls, profile):
        return {
            'name': profile.name,
            'headline': profile.headline,
            'country': profile.country_code,
            'skills': sorted(profile.skills),
            'hourly_rate_min': profile.hourly_rate_min,
            'hourly_rate_max': profile.hourly_rate_max,
            'availability_hours': profile.availability_hours,
            'availability_type': profile.availability_type,
            'bio': profile.bio,
        }

    @classmethod
    def validate_changes(cls, profile, changes):
        """
        Validate a partial update against the merged profile and return the
        store-ready changes. `country` is a country code; the stored country
        name is derived from it.
        """
        unknown = set(changes) - set(cls.base_fields)
        if unknown:
            raise ValidationError(errors={name: "Unknown profile field." for name in sorted(unknown)})
        form = cls(data={**cls.initial_from(profile), **changes})
        data = clean_or_raise(form, fields=changes)
        return _store_changes(data, changes)


class EmployerProfileForm(forms.Form):
    company_name = forms.CharField(
        max_length=150,
        min_length=2,
        error_messages={'min_length': "Company name must be at least 2 characters."},
    )
    country = forms.ChoiceField(choices=COUNTRY_CHOICES, error_messages={'required': "Country is required."})
    bio = forms.CharField(
        min_length=20,
        error_messages={'min_length': "Bio must be at least 20 characters."},
        widget=forms.Textarea(attrs={'rows': 4}),
    )

    @classmethod
    def initial_from(cls, profile):
        return {'company_name': profile.company_name, 'country': profile.country_code, 'bio': profile.bio}

    @classmethod
    def validate_changes(cls, profile, changes):
        unknown = set(changes) - set(cls.base_fields)
        if unknown:
            raise ValidationError(errors={name: "Unknown profile field." for name in sorted(unknown)})
        form = cls(data={**cls.initial_from(profile), **changes})
        data = clean_or_raise(form, fields=changes)
        return _store_changes(data, changes)


def _store_changes(data, changes):
    result = {name: data[name] for name in changes if name != 'country'}
    if 'country' in changes:
        result['country_code'] = data['country']
        result['country'] = country_name(data['country'])
    if 'skills' in result:
        result['skills'] = frozenset(result['skills'])
    return result
