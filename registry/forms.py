from django import forms

from . import eligibility
from .models import Participant, StudyLevel, StudyProgram


class RegistrationForm(forms.Form):
    # --- CSS Class Definitions for Tailwind v4 ---
    INPUT_CLASS = "block w-full rounded-xl border-0 py-3 px-4 text-zinc-900 shadow-sm ring-1 ring-zinc-300 placeholder:text-zinc-400 focus:ring-2 focus:ring-indigo-600 focus:ring-offset-2 transition-all"

    participant_name = forms.CharField(
        label="Full Name",
        max_length=200,
        widget=forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': 'John Doe'})
    )
    participant_email = forms.EmailField(
        label="Email Address",
        widget=forms.EmailInput(attrs={'class': INPUT_CLASS, 'placeholder': 'john@example.com'})
    )
    participant_phone = forms.CharField(
        label="Phone Number",
        required=False,
        widget=forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': '+1 234 567 890'})
    )
    study_level = forms.ChoiceField(
        label="Study Level",
        required=False,
        choices=[('', 'Not specified')] + StudyLevel.choices,
        widget=forms.Select(attrs={'class': INPUT_CLASS})
    )
    study_program = forms.ChoiceField(
        label="Study Program",
        required=False,
        choices=[('', 'Not specified')] + StudyProgram.choices,
        widget=forms.Select(attrs={'class': INPUT_CLASS})
    )

    def __init__(self, *args, **kwargs):
        self.event = kwargs.pop('event')
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned_data = super().clean()

        # Same gate the registration service enforces
        verdict = eligibility.registration_gate(self.event, self.participant_preview())
        if not verdict.eligible:
            raise forms.ValidationError(verdict.reason.capitalize(), code='not_eligible')
        return cleaned_data

    def participant_preview(self):
        return Participant(
            name=self.cleaned_data.get('participant_name', ''),
            email=self.cleaned_data.get('participant_email', ''),
            study_level=self.cleaned_data.get('study_level', ''),
            study_program=self.cleaned_data.get('study_program', ''),
        )

    def save_participant(self):
        # Submitted study details replace the stored ones
        defaults = {
            'name': self.cleaned_data['participant_name'],
            'study_level': self.cleaned_data['study_level'],
            'study_program': self.cleaned_data['study_program'],
        }
        if self.cleaned_data['participant_phone']:
            defaults['phone'] = self.cleaned_data['participant_phone']

        participant, created = Participant.objects.update_or_create(
            email=self.cleaned_data['participant_email'],
            defaults=defaults,
        )
        return participant


class DecisionForm(forms.Form):
    comment = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 2}))


class CheckInForm(forms.Form):
    token = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'autofocus': True, 'autocomplete': 'off'})
    )
