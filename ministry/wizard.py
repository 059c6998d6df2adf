"""
ministry/wizard.py

Ten-step minister registration/edit flow.

MinisterWizard owns the step sequence and the draft; steps validate their
own fields (ministry.steps) and hand back only what they own. The wizard
lives in the session between requests:

  start  → MinisterWizard() / MinisterWizard.for_minister(m)
  steps  → update_field() per returned field, then on_next()/on_back()
  finish → handle_submit() on OVERVIEW, through the configured gateway
"""
from django.db import models
from .gateway import GatewayError, get_gateway
from .serializers import DRAFT_FIELDS, empty_draft, minister_to_draft
import copy
import logging

logger = logging.getLogger(__name__)


class FormStep(models.TextChoices):
    PERSONAL_INFORMATION       = "personal_information",       "Personal Information"
    CONTACT_GOVERNMENT_INFO    = "contact_government_info",    "Contact & Government Info"
    FAMILY_SPOUSE_INFORMATION  = "family_spouse_information",  "Family & Spouse"
    EMERGENCY_CONTACTS_SKILLS  = "emergency_contacts_skills",  "Emergency Contacts & Skills"
    EDUCATION_EMPLOYMENT       = "education_employment",       "Education & Employment"
    MINISTRY_EXPERIENCE_SKILLS = "ministry_experience_skills", "Ministry Experience & Skills"
    MINISTRY_RECORDS_AWARDS    = "ministry_records_awards",    "Ministry Records & Awards"
    SEMINARS_CONFERENCES       = "seminars_conferences",       "Seminars & Conferences"
    CERTIFICATION_SIGNATURES   = "certification_signatures",   "Certification & Signatures"
    OVERVIEW                   = "overview",                   "Overview"


STEPS = list(FormStep)

DEFAULT_SUBMIT_ERROR = "An error occurred while submitting the form. Please try again."


def describe_error(exc):
    """The gateway message, followed by the first field problem when there is one."""
    message = exc.message or DEFAULT_SUBMIT_ERROR
    if exc.details and isinstance(exc.details[0], dict):
        first = exc.details[0]
        field = first.get("field", "").replace(".", " ").replace("_", " ").strip()
        problem = first.get("message", "")
        if field and problem:
            return f"{message}: {field.capitalize()} - {problem}"
        if problem:
            return f"{message}: {problem}"
    return message


class StepIndicator:
    """Progress numbers for the step header."""

    def __init__(self, current_step):
        self.current_step = FormStep(current_step)
        self.index = STEPS.index(self.current_step)

    @property
    def position(self):
        return self.index + 1

    @property
    def total(self):
        return len(STEPS)

    @property
    def percent(self):
        return round(self.position * 100 / self.total)

    @property
    def items(self):
        items = []
        for index, step in enumerate(STEPS):
            if index < self.index:
                state = "complete"
            elif index == self.index:
                state = "current"
            else:
                state = "upcoming"
            items.append({"number": index + 1, "step": step, "label": step.label, "state": state})
        return items


class MinisterWizard:

    def __init__(self, draft=None, minister_id=None, current_step=None,
                 gateway=None, on_success=None, on_close=None):
        self.draft = copy.deepcopy(draft) if draft is not None else empty_draft()
        self.minister_id = minister_id
        self.current_step = FormStep(current_step or STEPS[0])
        self.is_submitting = False
        self.submission_error = None
        self.show_success = False
        self.result = None
        self._gateway = gateway
        self.on_success = on_success
        self.on_close = on_close

    @classmethod
    def for_minister(cls, minister, **collaborators):
        """Edit mode: hydrate the draft from a stored minister."""
        draft = minister_to_draft(minister)
        draft.pop("id", None)
        return cls(draft=draft, minister_id=minister.pk, **collaborators)

    @property
    def gateway(self):
        if self._gateway is None:
            self._gateway = get_gateway()
        return self._gateway

    @property
    def is_edit(self):
        return self.minister_id is not None

    @property
    def step_index(self):
        return STEPS.index(self.current_step)

    @property
    def is_first_step(self):
        return self.step_index == 0

    @property
    def is_overview(self):
        return self.current_step == FormStep.OVERVIEW

    @property
    def indicator(self):
        return StepIndicator(self.current_step)

    # ── Draft ──

    def update_field(self, field, value):
        """Replace one top-level field (scalar or whole list) of the draft."""
        if field not in DRAFT_FIELDS:
            raise KeyError(field)
        self.draft[field] = copy.deepcopy(value)

    def update_fields(self, values):
        for field, value in values.items():
            self.update_field(field, value)

    # ── Navigation ──

    def on_next(self):
        if self.is_overview:
            return
        self.current_step = STEPS[self.step_index + 1]

    def on_back(self):
        if self.is_first_step:
            if self.on_close:
                self.on_close()
            return
        self.current_step = STEPS[self.step_index - 1]

    # ── Submission ──

    def handle_submit(self):
        """
        Send the draft through the gateway once.

        Returns True on success. On failure the error is kept in
        `submission_error`, the wizard stays on OVERVIEW and can retry.
        """
        if not self.is_overview:
            raise ValueError("The draft can only be submitted from the overview step.")

        self.is_submitting = True
        self.submission_error = None
        try:
            if self.is_edit:
                result = self.gateway.update(self.minister_id, self.draft)
            else:
                result = self.gateway.create(self.draft)
        except GatewayError as exc:
            logger.warning(f"Minister submission failed: {exc.message}")
            self.submission_error = describe_error(exc)
            return False
        finally:
            self.is_submitting = False

        self.result = result
        if self.on_success:
            self.on_success(result)
        else:
            self.show_success = True
        return True

    # ── Session ──

    def to_session(self):
        return {
            "draft": self.draft,
            "minister_id": self.minister_id,
            "current_step": self.current_step.value,
            "submission_error": self.submission_error,
            "show_success": self.show_success,
        }

    @classmethod
    def from_session(cls, state, **collaborators):
        wizard = cls(
            draft=state["draft"],
            minister_id=state.get("minister_id"),
            current_step=state.get("current_step"),
            **collaborators,
        )
        wizard.submission_error = state.get("submission_error")
        wizard.show_success = state.get("show_success", False)
        return wizard
