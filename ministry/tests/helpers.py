"""
Shared builders for the ministry tests.
"""
from django.contrib.auth.models import User
from ministry.models import Church, CivilStatus, Gender, Minister, MinistryRank, MinistrySkill
from ministry.serializers import empty_draft
import datetime


def make_user(username="admin"):
    return User.objects.create_user(username=username, password="secret-pass-123")


def make_rank(name="Pastor", description=""):
    return MinistryRank.objects.get_or_create(name=name, defaults={"description": description})[0]


def make_skill(name="Preaching", description="Delivering sermons"):
    return MinistrySkill.objects.get_or_create(name=name, defaults={"description": description})[0]


def make_church(name="Redeemer Church Manila", **extra):
    defaults = {"address": "123 Rizal Ave, Manila", **extra}
    return Church.objects.get_or_create(name=name, defaults=defaults)[0]


def minister_fields(**overrides):
    """Every required Minister column, as model values."""
    fields = {
        "first_name": "Juan",
        "last_name": "Dela Cruz",
        "date_of_birth": datetime.date(1985, 6, 15),
        "place_of_birth": "Cebu City",
        "gender": Gender.MALE,
        "height_feet": "5.7",
        "weight_kg": "70",
        "civil_status": CivilStatus.SINGLE,
        "address": "12 Mabini St, Quezon City",
        "present_address": "12 Mabini St, Quezon City",
        "father_name": "Pedro Dela Cruz",
        "father_province": "Cebu",
        "father_birthday": datetime.date(1955, 1, 10),
        "father_occupation": "Farmer",
        "mother_name": "Maria Dela Cruz",
        "mother_province": "Cebu",
        "mother_birthday": datetime.date(1958, 3, 22),
        "mother_occupation": "Teacher",
    }
    fields.update(overrides)
    return fields


def make_minister(**overrides):
    return Minister.objects.create(**minister_fields(**overrides))


def minister_draft(**overrides):
    """A complete, valid draft (no list entries) in the wire format."""
    draft = empty_draft()
    for name, value in minister_fields().items():
        draft[name] = value.isoformat() if isinstance(value, datetime.date) else value
    draft.update(overrides)
    return draft


def management_form(prefix, total=0, initial=0):
    return {
        f"{prefix}-TOTAL_FORMS": str(total),
        f"{prefix}-INITIAL_FORMS": str(initial),
        f"{prefix}-MIN_NUM_FORMS": "0",
        f"{prefix}-MAX_NUM_FORMS": "1000",
    }
