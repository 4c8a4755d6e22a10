# core/forms.py
from django import forms
from django.core.exceptions import NON_FIELD_ERRORS

from core.exceptions import ValidationError


class SkillListField(forms.Field):
    """Accepts a list of skill names or one comma separated string."""

    widget = forms.MultipleHiddenInput

    def __init__(self, *, min_count=0, **kwargs):
        self.min_count = min_count
        super().__init__(**kwargs)

    def to_python(self, value):
        if not value:
            return []
        if isinstance(value, str):
            value = value.split(',')
        names = []
        for name in value:
            name = str(name).strip()
            if name and name not in names:
                names.append(name)
        return names

    def validate(self, value):
        if self.required and not value:
            raise forms.ValidationError(self.error_messages['required'], code='required')
        if len(value) < self.min_count:
            raise forms.ValidationError(f"Select at least {self.min_count} skill(s).", code='min_count')


def clean_or_raise(form, fields=None):
    """
    Return the form's cleaned data or raise a marketplace ValidationError.

    With `fields`, only errors on those fields (and non-field errors) count,
    which is how partial profile updates are checked against the merged profile.
    """
    if form.is_valid():
        return form.cleaned_data
    errors = {
        name: messages[0]
        for name, messages in form.errors.items()
        if fields is None or name in fields or name == NON_FIELD_ERRORS
    }
    if errors:
        raise ValidationError(errors=errors)
    return form.cleaned_data


class PaginationForm(forms.Form):
    limit = forms.IntegerField(required=False, min_value=0)
    offset = forms.IntegerField(required=False, min_value=0)

    def page(self, default_limit=None):
        """(limit, offset); the default limit only applies when neither is given."""
        data = clean_or_raise(self)
        limit, offset = data.get('limit'), data.get('offset')
        if limit is None and offset is None:
            limit = default_limit
        return limit, offset
