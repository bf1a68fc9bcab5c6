# feedback/forms.py
"""
Forms for the feedback application.
"""

from django import forms

from .models import Feedback

#: Message shown when the tennis rating or overall text is missing
REQUIRED_MESSAGE = "Missing required fields"

#: Message shown when consent was not given
CONSENT_MESSAGE = "Consent is required to submit feedback"


class FeedbackForm(forms.ModelForm):
    """
    Form validating a player's feedback.

    Ratings are checked by the model validators (1 to 5). Consent
    must be given, and ``photo_urls`` must be a list of strings.
    """

    photo_urls = forms.JSONField(required=False)

    class Meta:
        model = Feedback
        fields = [
            "accommodation_rating",
            "accommodation_text",
            "tennis_rating",
            "tennis_text",
            "excursions_rating",
            "excursions_text",
            "overall_text",
            "photo_urls",
            "consent_given",
        ]

    def clean_photo_urls(self):
        urls = self.cleaned_data.get("photo_urls") or []
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise forms.ValidationError("Photo URLs must be a list of strings", code="invalid")
        return urls

    def clean_consent_given(self):
        consent = self.cleaned_data.get("consent_given")
        if not consent:
            raise forms.ValidationError(CONSENT_MESSAGE, code="consent")
        return consent

    def error_message(self) -> str:
        """First error to report, missing fields taking precedence."""
        errors = self.errors.as_data()
        if any(e.code == "required" for errs in errors.values() for e in errs):
            return REQUIRED_MESSAGE
        for name in self.Meta.fields:
            if name in errors:
                return errors[name][0].messages[0]
        return next(iter(self.errors.values()))[0]
