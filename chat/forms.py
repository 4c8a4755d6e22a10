# chat/forms.py
from django import forms

from core.conf import marketplace_setting


class MessageForm(forms.Form):
    """Content is trimmed first, the length rule applies to the trimmed text."""

    content = forms.CharField(
        strip=True,
        error_messages={'required': "Message cannot be empty."},
        widget=forms.Textarea(attrs={'rows': 2, 'placeholder': 'Type a message...'}),
    )

    def clean_content(self):
        content = self.cleaned_data['content']
        limit = marketplace_setting('MESSAGE_MAX_LENGTH')
        if len(content) > limit:
            raise forms.ValidationError(f"Message cannot exceed {limit} characters.")
        return content
