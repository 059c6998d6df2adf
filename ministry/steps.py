"""
ministry/steps.py

One WizardStep per FormStep. A step declares the scalar fields and lists
it owns, validates them with a Django form and one formset per list, and
returns only that subset of the draft.
"""
from collections import namedtuple
from django.forms import formset_factory
from .forms import (
    CertificationForm, ContactGovernmentForm, FamilyInformationForm,
    PersonalInformationForm, SkillsInterestsForm,
)
from .serializers import LIST_SPECS, to_draft_value
from .wizard import FormStep


StepResult = namedtuple("StepResult", ["is_valid", "values", "form", "formsets"])


class WizardStep:

    def __init__(self, step, description="", form_class=None, lists=(), min_entries=None):
        self.step = step
        self.description = description
        self.form_class = form_class
        self.lists = tuple(lists)
        self.min_entries = min_entries or {}

    @property
    def title(self):
        return self.step.label

    @property
    def template_name(self):
        if self.step == FormStep.OVERVIEW:
            return "ministry/steps/overview.html"
        return "ministry/steps/step.html"

    @property
    def scalar_fields(self):
        return self.form_class.model_fields if self.form_class else ()

    @property
    def owned_fields(self):
        return self.scalar_fields + self.lists

    def formset_class(self, list_name):
        minimum = self.min_entries.get(list_name, 0)
        return formset_factory(
            LIST_SPECS[list_name].form_class,
            extra=0,
            can_delete=True,
            min_num=minimum,
            validate_min=bool(minimum),
        )

    def build(self, draft, data=None):
        """Forms for this step, bound to `data` or seeded from `draft`."""
        form = None
        if self.form_class:
            initial = {name: draft.get(name) for name in self.scalar_fields}
            form = self.form_class(data, initial=initial, draft=draft)

        formsets = {}
        for name in self.lists:
            formset_class = self.formset_class(name)
            formsets[name] = formset_class(data, initial=draft.get(name) or [], prefix=name)
        return form, formsets

    def submit(self, draft, data):
        """
        Validate posted data. On success `values` holds every field this
        step owns and nothing else.
        """
        form, formsets = self.build(draft, data)

        valid = form.is_valid() if form else True
        for formset in formsets.values():
            valid = formset.is_valid() and valid

        if not valid:
            return StepResult(False, {}, form, formsets)

        values = {}
        if form:
            for name in self.scalar_fields:
                values[name] = to_draft_value(form.cleaned_data.get(name))
        for name, formset in formsets.items():
            values[name] = self._entries(formset, LIST_SPECS[name].fields)
        return StepResult(True, values, form, formsets)

    def _entries(self, formset, fields):
        entries = []
        for form in formset.forms:
            cleaned = form.cleaned_data
            # untouched blank rows and deleted rows
            if not cleaned or cleaned.get("DELETE"):
                continue
            entry = {}
            if cleaned.get("id"):
                entry["id"] = cleaned["id"]
            for name in fields:
                entry[name] = to_draft_value(cleaned.get(name))
            entries.append(entry)
        return entries


WIZARD_STEPS = {
    FormStep.PERSONAL_INFORMATION: WizardStep(
        FormStep.PERSONAL_INFORMATION,
        "Basic details, physical information and church designation.",
        form_class=PersonalInformationForm,
    ),
    FormStep.CONTACT_GOVERNMENT_INFO: WizardStep(
        FormStep.CONTACT_GOVERNMENT_INFO,
        "Contact details, addresses and government ID numbers.",
        form_class=ContactGovernmentForm,
    ),
    FormStep.FAMILY_SPOUSE_INFORMATION: WizardStep(
        FormStep.FAMILY_SPOUSE_INFORMATION,
        "Parents, spouse (if married) and children.",
        form_class=FamilyInformationForm,
        lists=("children",),
    ),
    FormStep.EMERGENCY_CONTACTS_SKILLS: WizardStep(
        FormStep.EMERGENCY_CONTACTS_SKILLS,
        "At least one emergency contact, plus skills and interests.",
        form_class=SkillsInterestsForm,
        lists=("emergency_contacts",),
        min_entries={"emergency_contacts": 1},
    ),
    FormStep.EDUCATION_EMPLOYMENT: WizardStep(
        FormStep.EDUCATION_EMPLOYMENT,
        "Schools attended and employment history.",
        lists=("education_backgrounds", "employment_records"),
    ),
    FormStep.MINISTRY_EXPERIENCE_SKILLS: WizardStep(
        FormStep.MINISTRY_EXPERIENCE_SKILLS,
        "Ranks held over time and ministry skills.",
        lists=("ministry_experiences", "ministry_skills"),
    ),
    FormStep.MINISTRY_RECORDS_AWARDS: WizardStep(
        FormStep.MINISTRY_RECORDS_AWARDS,
        "Churches served and awards received.",
        lists=("ministry_records", "awards_recognitions"),
    ),
    FormStep.SEMINARS_CONFERENCES: WizardStep(
        FormStep.SEMINARS_CONFERENCES,
        "Seminars and conferences attended.",
        lists=("seminars_conferences",),
    ),
    FormStep.CERTIFICATION_SIGNATURES: WizardStep(
        FormStep.CERTIFICATION_SIGNATURES,
        "Case reports, certifier and signatures.",
        form_class=CertificationForm,
        lists=("case_reports",),
    ),
    FormStep.OVERVIEW: WizardStep(
        FormStep.OVERVIEW,
        "Review everything before submitting.",
    ),
}


def get_step(step):
    return WIZARD_STEPS[FormStep(step)]
