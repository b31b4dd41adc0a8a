import re

from django import forms
from django.core.exceptions import ValidationError

from .choices import Category, District, Status, Urgency

PHONE_PATTERN = re.compile(r"^09\d{8}$")


class ComplaintSubmissionForm(forms.Form):
    district = forms.ChoiceField(choices=District.choices)
    category = forms.ChoiceField(choices=Category.choices)
    urgency = forms.ChoiceField(choices=Urgency.choices, initial=Urgency.NORMAL)
    title = forms.CharField(min_length=3, max_length=255)
    description = forms.CharField(min_length=10)
    phone_number = forms.CharField(max_length=10)
    can_help = forms.BooleanField(required=False)
    help_offer = forms.CharField(required=False)

    def clean_phone_number(self):
        phone_number = self.cleaned_data["phone_number"].strip()
        if not PHONE_PATTERN.match(phone_number):
            raise ValidationError("Phone number must start with 09 and be 10 digits.")
        return phone_number

    def clean(self):
        cleaned_data = super().clean()
        if not cleaned_data.get("can_help"):
            cleaned_data["help_offer"] = ""
        elif not cleaned_data.get("help_offer"):
            self.add_error("help_offer", "Please describe how you can help.")
        return cleaned_data

    def first_error(self):
        """Return ``(field, message)`` for the first invalid field, in form order."""
        for name in self.fields:
            if name in self.errors:
                return name, self.errors[name][0]
        field, messages = next(iter(self.errors.items()))
        return field, messages[0]


class TransitionForm(forms.Form):
    status = forms.ChoiceField(choices=Status.choices)
    resolution_note = forms.CharField(required=False)
    rejection_reason = forms.CharField(required=False)


class ComplaintNotesForm(forms.Form):
    staff_notes = forms.CharField(required=False)
    public_note = forms.CharField(required=False)
    expected_completion = forms.DateField(required=False)

    def updates(self):
        """Cleaned values for the fields the request actually sent."""
        return {name: self.cleaned_data[name] for name in self.fields if name in self.data}
