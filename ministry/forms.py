from django import forms
from django.core.exceptions import ValidationError
from .models import (
    AwardRecognition, CaseReport, Child, Church, CivilStatus, EducationBackground,
    EmergencyContact, EmploymentRecord, Gender, Minister, MinisterSkill,
    MinistryExperience, MinistryRank, MinistryRecord, MinistrySkill, SeminarConference,
)
import datetime


def date_input():
    return forms.DateInput(attrs={'class': 'input-field', 'type': 'date'}, format='%Y-%m-%d')


def style_widgets(form):
    """Give every widget the shared input styling."""
    for field in form.fields.values():
        if isinstance(field.widget, forms.HiddenInput):
            continue
        css = 'checkbox' if isinstance(field.widget, forms.CheckboxInput) else 'input-field'
        field.widget.attrs.setdefault('class', css)


def _formfield(db_field, **kwargs):
    if db_field.get_internal_type() == 'DateField':
        kwargs['widget'] = date_input()
    return db_field.formfield(**kwargs)


def _not_in_future(value, label):
    if value and value > datetime.date.today():
        raise ValidationError(f'{label} cannot be in the future.')
    return value


# ════════════════════════════════════════════════════════════
# WIZARD STEP FORMS
# ════════════════════════════════════════════════════════════

class StepForm(forms.Form):
    """
    Base form for one wizard step.

    Fields are taken from the Minister model (labels, lengths, choices),
    but validation stays local to the step: no model-level clean runs here.
    `draft` is the wizard's current aggregate, read-only for the step.
    """

    model_fields = ()

    def __init__(self, *args, draft=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.draft = draft or {}
        self.fields.update(
            forms.fields_for_model(Minister, fields=self.model_fields, formfield_callback=_formfield)
        )
        style_widgets(self)


class PersonalInformationForm(StepForm):
    model_fields = (
        'first_name', 'middle_name', 'last_name', 'suffix', 'nickname',
        'date_of_birth', 'place_of_birth', 'gender', 'civil_status',
        'height_feet', 'weight_kg', 'image_url', 'church', 'biography',
    )

    def clean_date_of_birth(self):
        return _not_in_future(self.cleaned_data.get('date_of_birth'), 'Date of birth')


class ContactGovernmentForm(StepForm):
    model_fields = (
        'email', 'telephone', 'address', 'present_address', 'permanent_address',
        'passport_number', 'sss_number', 'philhealth', 'tin',
    )

    def clean_email(self):
        return (self.cleaned_data.get('email') or '').strip().lower()


SPOUSE_FIELDS = ('spouse_name', 'spouse_province', 'spouse_birthday', 'spouse_occupation', 'wedding_date')


class FamilyInformationForm(StepForm):
    model_fields = (
        'father_name', 'father_province', 'father_birthday', 'father_occupation',
        'mother_name', 'mother_province', 'mother_birthday', 'mother_occupation',
    ) + SPOUSE_FIELDS

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.is_married:
            self.fields['spouse_name'].required = True
        else:
            for name in SPOUSE_FIELDS:
                self.fields[name].widget = forms.HiddenInput()

    @property
    def is_married(self):
        return self.draft.get('civil_status') == CivilStatus.MARRIED

    def clean_father_birthday(self):
        return _not_in_future(self.cleaned_data.get('father_birthday'), "Father's birthday")

    def clean_mother_birthday(self):
        return _not_in_future(self.cleaned_data.get('mother_birthday'), "Mother's birthday")

    def clean(self):
        cleaned_data = super().clean()

        # Spouse details only belong to married ministers
        if not self.is_married:
            for name in SPOUSE_FIELDS:
                cleaned_data[name] = None if name in ('spouse_birthday', 'wedding_date') else ''
            return cleaned_data

        wedding_date = cleaned_data.get('wedding_date')
        date_of_birth = self.draft.get('date_of_birth')
        if wedding_date and date_of_birth and wedding_date.isoformat() < str(date_of_birth):
            self.add_error('wedding_date', 'Wedding date cannot be before date of birth.')

        return cleaned_data


class SkillsInterestsForm(StepForm):
    model_fields = ('skills', 'hobbies', 'sports', 'other_religious_secular_training')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in self.model_fields:
            self.fields[name].widget.attrs['rows'] = 2


class CertificationForm(StepForm):
    model_fields = ('certified_by', 'signature_image_url', 'signature_by_certified_image_url')


# ════════════════════════════════════════════════════════════
# LIST ENTRY FORMS (one row of a minister sub-list)
# ════════════════════════════════════════════════════════════

class EntryForm(forms.ModelForm):
    """Row form; `id` round-trips the stored identity of an existing entry."""

    id = forms.IntegerField(required=False, widget=forms.HiddenInput)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_widgets(self)

    def clean(self):
        cleaned_data = super().clean()
        from_year = cleaned_data.get('from_year')
        to_year = cleaned_data.get('to_year')
        if from_year and to_year and to_year < from_year:
            self.add_error('to_year', 'End year cannot be before start year.')
        return cleaned_data


class ChildForm(EntryForm):
    class Meta:
        model = Child
        fields = ['name', 'place_of_birth', 'date_of_birth', 'gender']
        widgets = {'date_of_birth': date_input()}


class EmergencyContactForm(EntryForm):
    class Meta:
        model = EmergencyContact
        fields = ['name', 'relationship', 'address', 'contact_number']


class EducationBackgroundForm(EntryForm):
    class Meta:
        model = EducationBackground
        fields = ['school_name', 'educational_attainment', 'course', 'date_graduated', 'description']
        widgets = {
            'date_graduated': date_input(),
            'description': forms.Textarea(attrs={'rows': 2}),
        }


class EmploymentRecordForm(EntryForm):
    class Meta:
        model = EmploymentRecord
        fields = ['company_name', 'position', 'from_year', 'to_year']
        widgets = {
            'from_year': forms.TextInput(attrs={'placeholder': 'YYYY'}),
            'to_year': forms.TextInput(attrs={'placeholder': 'YYYY or blank for present'}),
        }


class MinistryExperienceForm(EntryForm):
    class Meta:
        model = MinistryExperience
        fields = ['ministry_rank', 'from_year', 'to_year', 'description']
        widgets = {'description': forms.Textarea(attrs={'rows': 2})}


class MinisterSkillForm(EntryForm):
    class Meta:
        model = MinisterSkill
        fields = ['ministry_skill']


class MinistryRecordForm(EntryForm):
    class Meta:
        model = MinistryRecord
        fields = ['church_location', 'from_year', 'to_year', 'contribution']
        widgets = {'contribution': forms.Textarea(attrs={'rows': 2})}


class AwardRecognitionForm(EntryForm):
    class Meta:
        model = AwardRecognition
        fields = ['year', 'description']
        widgets = {'description': forms.Textarea(attrs={'rows': 2})}


class SeminarConferenceForm(EntryForm):
    class Meta:
        model = SeminarConference
        fields = ['title', 'year', 'number_of_hours', 'place', 'description']
        widgets = {'description': forms.Textarea(attrs={'rows': 2})}

    def clean_number_of_hours(self):
        hours = self.cleaned_data.get('number_of_hours')
        if hours is not None and hours < 1:
            raise ValidationError('Number of hours must be at least 1.')
        return hours


class CaseReportForm(EntryForm):
    class Meta:
        model = CaseReport
        fields = ['year', 'description']
        widgets = {'description': forms.Textarea(attrs={'rows': 2})}


# ════════════════════════════════════════════════════════════
# MINISTER (whole record, used by the API and services)
# ════════════════════════════════════════════════════════════

class MinisterDataForm(forms.ModelForm):
    """Validates every scalar column of a submitted minister record."""

    class Meta:
        model = Minister
        exclude = ['created_at', 'updated_at']

    def clean_email(self):
        return (self.cleaned_data.get('email') or '').strip().lower()


class MinisterSearchForm(forms.Form):
    """Search and sort for the minister table."""

    SORT_CHOICES = [
        ('-created_at', 'Newest first'),
        ('created_at', 'Oldest first'),
        ('last_name', 'Last name A-Z'),
        ('-last_name', 'Last name Z-A'),
        ('first_name', 'First name A-Z'),
    ]

    q = forms.CharField(
        required=False,
        label='',
        widget=forms.TextInput(attrs={
            'class': 'input-field',
            'placeholder': 'Search name, email, phone or address...',
        })
    )

    civil_status = forms.ChoiceField(
        required=False,
        label='Civil Status',
        choices=[('', 'All')] + list(CivilStatus.choices),
        widget=forms.Select(attrs={'class': 'input-field'})
    )

    gender = forms.ChoiceField(
        required=False,
        label='Gender',
        choices=[('', 'All')] + list(Gender.choices),
        widget=forms.Select(attrs={'class': 'input-field'})
    )

    church = forms.ModelChoiceField(
        queryset=Church.objects.all(),
        required=False,
        label='Church',
        empty_label='All Churches',
        widget=forms.Select(attrs={'class': 'input-field'})
    )

    sort = forms.ChoiceField(
        required=False,
        label='Sort',
        choices=SORT_CHOICES,
        widget=forms.Select(attrs={'class': 'input-field'})
    )


class ReferenceSearchForm(forms.Form):
    """Search box shared by the rank, skill and church tables."""

    q = forms.CharField(
        required=False,
        label='',
        widget=forms.TextInput(attrs={
            'class': 'input-field',
            'placeholder': 'Search...',
        })
    )

    sort = forms.ChoiceField(
        required=False,
        choices=[
            ('name', 'Name A-Z'),
            ('-name', 'Name Z-A'),
            ('-created_at', 'Newest first'),
            ('created_at', 'Oldest first'),
        ],
        widget=forms.Select(attrs={'class': 'input-field'})
    )


# ════════════════════════════════════════════════════════════
# REFERENCE DATA FORMS
# ════════════════════════════════════════════════════════════

class MinistryRankForm(forms.ModelForm):
    """Add/edit form for a ministry rank."""

    class Meta:
        model = MinistryRank
        fields = ['name', 'description']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'input-field',
                'placeholder': 'e.g. Pastor, Elder, Deacon'
            }),
            'description': forms.Textarea(attrs={
                'class': 'input-field',
                'rows': 3,
                'placeholder': 'Description (optional)'
            }),
        }

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise ValidationError('Ministry rank name cannot be empty.')
        return name


class MinistrySkillForm(forms.ModelForm):
    class Meta:
        model = MinistrySkill
        fields = ['name', 'description']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'input-field',
                'placeholder': 'e.g. Preaching, Worship Leading'
            }),
            'description': forms.Textarea(attrs={
                'class': 'input-field',
                'rows': 3,
            }),
        }

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise ValidationError('Ministry skill name cannot be empty.')
        return name

    def clean_description(self):
        description = (self.cleaned_data.get('description') or '').strip()
        if not description:
            raise ValidationError('Description cannot be empty.')
        return description


class LocationPickerWidget(forms.TextInput):
    """Address input with a "Pick on map" button that opens the picker modal."""

    template_name = 'ministry/widgets/location_picker.html'


class ChurchForm(forms.ModelForm):
    """Church form; latitude/longitude are filled by the map picker."""

    class Meta:
        model = Church
        fields = [
            'name', 'address', 'latitude', 'longitude',
            'email', 'image_url', 'link', 'description',
        ]
        widgets = {
            'address': LocationPickerWidget(),
            'latitude': forms.NumberInput(attrs={'class': 'input-field', 'step': 'any', 'readonly': True}),
            'longitude': forms.NumberInput(attrs={'class': 'input-field', 'step': 'any', 'readonly': True}),
            'description': forms.Textarea(attrs={'class': 'input-field', 'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_widgets(self)
