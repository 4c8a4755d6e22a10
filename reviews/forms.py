# reviews/forms.py
from django import forms

RATING_CHOICES = [(i, f"{i} star{'s' if i > 1 else ''}") for i in range(1, 6)]


class ReviewForm(forms.Form):
    rating = forms.TypedChoiceField(
        choices=RATING_CHOICES,
        coerce=int,
        error_messages={'invalid_choice': "Rating must be a whole number from 1 to 5."},
    )
    comment = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 3}))
