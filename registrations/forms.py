# registrations/forms.py
"""
Forms for the registrations application.

The registration API receives JSON, but validation goes through a
regular Django form so that required fields, choices and e-mail
format are checked the same way as anywhere else in Django.
"""

from django import forms

from .models import Registration, RegistrationOption

#: Message shown when any required participant field is missing
REQUIRED_MESSAGE = "All required fields must be filled"


class RegistrationForm(forms.ModelForm):
    """
    Form validating a participant's registration details.

    Attributes
    ----------
    optional_activities : MultipleChoiceField
        Add-on types chosen with the registration. Duplicates are
        collapsed, keeping the first occurrence order.
    """

    optional_activities = forms.MultipleChoiceField(
        choices=RegistrationOption.OptionType.choices,
        required=False,
    )

    class Meta:
        model = Registration
        fields = [
            "name",
            "email",
            "whatsapp_number",
            "tennis_experience_years",
            "play_frequency_per_month",
            "bedroom_type",
            "accepted_cancellation_policy",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Policy must be accepted, not merely present
        self.fields["accepted_cancellation_policy"].required = True
        self.fields["bedroom_type"].required = True

    def clean_optional_activities(self):
        return list(dict.fromkeys(self.cleaned_data.get("optional_activities") or []))

    def error_message(self) -> str:
        """
        Summarize the form errors for the ``error`` key of the response.

        Missing fields give the generic required-fields message; any
        other problem names the offending fields.
        """
        codes = {e.code for errs in self.errors.as_data().values() for e in errs}
        if "required" in codes:
            return REQUIRED_MESSAGE
        return "Invalid registration details: " + ", ".join(sorted(self.errors))

    @property
    def participant_fields(self) -> dict:
        """Cleaned model fields, without the add-on list."""
        return {name: self.cleaned_data[name] for name in self.Meta.fields}
