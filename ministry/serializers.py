"""
ministry/serializers.py

Conversion between Minister rows and the plain-dict "draft" shape that the
wizard, the JSON API and the gateways exchange:

- scalar fields keyed by model field name (dates as ISO strings,
  foreign keys as ids)
- one list of dicts per sub-record collection, keyed by related name
"""
from collections import namedtuple
from decimal import Decimal
from django.db import transaction
from django.db.models import Model
from .forms import (
    AwardRecognitionForm, CaseReportForm, ChildForm, EducationBackgroundForm,
    EmergencyContactForm, EmploymentRecordForm, MinisterDataForm, MinisterSkillForm,
    MinistryExperienceForm, MinistryRecordForm, SeminarConferenceForm,
)
from .models import CivilStatus, Gender, Minister
import datetime


SCALAR_FIELDS = (
    # personal
    "first_name", "last_name", "middle_name", "suffix", "nickname",
    "date_of_birth", "place_of_birth", "gender", "height_feet", "weight_kg",
    "civil_status", "image_url", "biography", "church",
    # contact & government
    "email", "telephone", "address", "present_address", "permanent_address",
    "passport_number", "sss_number", "philhealth", "tin",
    # family
    "father_name", "father_province", "father_birthday", "father_occupation",
    "mother_name", "mother_province", "mother_birthday", "mother_occupation",
    "spouse_name", "spouse_province", "spouse_birthday", "spouse_occupation",
    "wedding_date",
    # skills & interests
    "skills", "hobbies", "sports", "other_religious_secular_training",
    # certification
    "certified_by", "signature_image_url", "signature_by_certified_image_url",
)

DATE_FIELDS = ("date_of_birth", "father_birthday", "mother_birthday", "spouse_birthday", "wedding_date")

ListSpec = namedtuple("ListSpec", ["form_class", "fields"])

LIST_SPECS = {
    "children":              ListSpec(ChildForm, ChildForm._meta.fields),
    "emergency_contacts":    ListSpec(EmergencyContactForm, EmergencyContactForm._meta.fields),
    "education_backgrounds": ListSpec(EducationBackgroundForm, EducationBackgroundForm._meta.fields),
    "employment_records":    ListSpec(EmploymentRecordForm, EmploymentRecordForm._meta.fields),
    "ministry_experiences":  ListSpec(MinistryExperienceForm, MinistryExperienceForm._meta.fields),
    "ministry_skills":       ListSpec(MinisterSkillForm, MinisterSkillForm._meta.fields),
    "ministry_records":      ListSpec(MinistryRecordForm, MinistryRecordForm._meta.fields),
    "awards_recognitions":   ListSpec(AwardRecognitionForm, AwardRecognitionForm._meta.fields),
    "seminars_conferences":  ListSpec(SeminarConferenceForm, SeminarConferenceForm._meta.fields),
    "case_reports":          ListSpec(CaseReportForm, CaseReportForm._meta.fields),
}

DRAFT_FIELDS = SCALAR_FIELDS + tuple(LIST_SPECS)


def to_draft_value(value):
    """Normalise a Python/model value into its JSON-friendly draft form."""
    if isinstance(value, Model):
        return value.pk
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def empty_draft():
    """A fresh draft with every field at its initial value."""
    draft = {}
    for name in SCALAR_FIELDS:
        draft[name] = None if name in DATE_FIELDS or name == "church" else ""
    draft["gender"] = Gender.MALE
    draft["civil_status"] = CivilStatus.SINGLE
    for name in LIST_SPECS:
        draft[name] = []
    return draft


def entry_to_dict(entry, fields):
    data = {"id": entry.pk}
    for name in fields:
        field = entry._meta.get_field(name)
        data[name] = to_draft_value(getattr(entry, field.attname))
    return data


def minister_to_draft(minister):
    """Full draft (including every sub-list) for an existing minister."""
    draft = {"id": minister.pk}
    for name in SCALAR_FIELDS:
        field = Minister._meta.get_field(name)
        draft[name] = to_draft_value(getattr(minister, field.attname))
    for list_name, spec in LIST_SPECS.items():
        draft[list_name] = [
            entry_to_dict(entry, spec.fields)
            for entry in getattr(minister, list_name).all()
        ]
    return draft


def minister_to_dict(minister, include_lists=True):
    """API representation: the draft plus timestamps and display helpers."""
    if include_lists:
        data = minister_to_draft(minister)
    else:
        data = {"id": minister.pk}
        for name in SCALAR_FIELDS:
            field = Minister._meta.get_field(name)
            data[name] = to_draft_value(getattr(minister, field.attname))
    data["full_name"] = minister.full_name
    data["church_name"] = minister.church.name if minister.church_id else None
    data["created_at"] = to_draft_value(minister.created_at)
    data["updated_at"] = to_draft_value(minister.updated_at)
    return data


def reference_to_dict(obj, fields):
    data = {"id": obj.pk}
    for name in fields:
        data[name] = to_draft_value(getattr(obj, name))
    data["created_at"] = to_draft_value(obj.created_at)
    data["updated_at"] = to_draft_value(obj.updated_at)
    return data


def _form_data(values):
    return {key: "" if value is None else value for key, value in values.items()}


class MinisterPayload:
    """
    Validates a submitted minister record (scalars plus sub-lists) and
    saves it in one transaction.

    With an `instance`, the payload is merged over the stored record:
    omitted scalars keep their value and omitted lists are left untouched,
    while every list present in `data` replaces the stored one.
    """

    def __init__(self, data, instance=None):
        if not isinstance(data, dict):
            raise TypeError("Minister payload must be an object.")

        self.instance = instance
        base = minister_to_draft(instance) if instance is not None else empty_draft()
        merged = {**base, **{k: v for k, v in data.items() if k in DRAFT_FIELDS}}

        self.replaced_lists = [
            name for name in LIST_SPECS
            if instance is None or name in data
        ]
        self.list_errors = {}

        scalars = {name: merged.get(name) for name in SCALAR_FIELDS}
        self.form = MinisterDataForm(data=_form_data(scalars), instance=instance)

        self.list_forms = {}
        for name, spec in LIST_SPECS.items():
            entries = merged.get(name) or []
            if not isinstance(entries, list):
                self.list_errors[name] = "Expected a list."
                entries = []
            forms = []
            for index, entry in enumerate(entries):
                if not isinstance(entry, dict):
                    self.list_errors[f"{name}.{index}"] = "Expected an object."
                    continue
                forms.append(spec.form_class(data=_form_data(entry)))
            self.list_forms[name] = forms

    def is_valid(self):
        valid = self.form.is_valid()
        for forms in self.list_forms.values():
            for form in forms:
                valid = form.is_valid() and valid
        return valid and not self.list_errors

    @property
    def error_dict(self):
        """Errors keyed by dotted field path, e.g. ``children.0.name``."""
        errors = {}
        for field, messages in self.form.errors.items():
            errors[field] = list(messages)
        for list_name, forms in self.list_forms.items():
            for index, form in enumerate(forms):
                for field, messages in form.errors.items():
                    errors[f"{list_name}.{index}.{field}"] = list(messages)
        for path, message in self.list_errors.items():
            errors[path] = [message]
        return errors

    @property
    def errors(self):
        """Flat ``[{field, message}]`` list, one item per message."""
        return [
            {"field": field, "message": message}
            for field, messages in self.error_dict.items()
            for message in messages
        ]

    @transaction.atomic
    def save(self):
        minister = self.form.save()
        for name in self.replaced_lists:
            getattr(minister, name).all().delete()
            for index, form in enumerate(self.list_forms[name]):
                entry = form.save(commit=False)
                entry.minister = minister
                entry.sort_order = index
                entry.save()
        return minister
