from django.contrib import admin
from django.utils.html import format_html
from .models import (
    AwardRecognition, CaseReport, Child, Church, EducationBackground,
    EmergencyContact, EmploymentRecord, Minister, MinisterSkill,
    MinistryExperience, MinistryRank, MinistryRecord, MinistrySkill, SeminarConference,
)


# ──────────────────────────────────────────
# REFERENCE DATA ADMIN
# ──────────────────────────────────────────
@admin.register(MinistryRank)
class MinistryRankAdmin(admin.ModelAdmin):
    list_display  = ("name", "get_minister_count", "created_at", "updated_at")
    search_fields = ("name", "description")
    ordering      = ("name",)

    def get_minister_count(self, obj):
        return obj.get_minister_count()
    get_minister_count.short_description = "Ministers"


@admin.register(MinistrySkill)
class MinistrySkillAdmin(admin.ModelAdmin):
    list_display  = ("name", "description", "created_at")
    search_fields = ("name", "description")
    ordering      = ("name",)


@admin.register(Church)
class ChurchAdmin(admin.ModelAdmin):
    list_display  = ("name", "address", "latitude", "longitude", "get_minister_count")
    search_fields = ("name", "address", "email")
    ordering      = ("name",)

    fieldsets = (
        ("Church", {
            "fields": ("name", "description", "image_url", "link", "email")
        }),
        ("Location", {
            "fields": ("address", "latitude", "longitude"),
        }),
    )

    def get_minister_count(self, obj):
        return obj.ministers.count()
    get_minister_count.short_description = "Ministers"


# ──────────────────────────────────────────
# MINISTER SUB-RECORD INLINES
# ──────────────────────────────────────────
class RecordInline(admin.TabularInline):
    extra = 0


class ChildInline(RecordInline):
    model = Child


class EmergencyContactInline(RecordInline):
    model = EmergencyContact


class EducationBackgroundInline(RecordInline):
    model = EducationBackground


class EmploymentRecordInline(RecordInline):
    model = EmploymentRecord


class MinistryExperienceInline(RecordInline):
    model         = MinistryExperience
    autocomplete_fields = ("ministry_rank",)


class MinisterSkillInline(RecordInline):
    model = MinisterSkill


class MinistryRecordInline(RecordInline):
    model = MinistryRecord


class AwardRecognitionInline(RecordInline):
    model = AwardRecognition


class SeminarConferenceInline(RecordInline):
    model = SeminarConference


class CaseReportInline(RecordInline):
    model = CaseReport


# ──────────────────────────────────────────
# MINISTER ADMIN
# ──────────────────────────────────────────
@admin.register(Minister)
class MinisterAdmin(admin.ModelAdmin):
    list_display = (
        "get_photo_thumb", "full_name", "gender",
        "civil_status", "church", "email", "telephone", "created_at",
    )
    list_filter     = ("civil_status", "gender", "church")
    search_fields   = ("first_name", "last_name", "middle_name", "email", "telephone")
    readonly_fields = ("get_photo_thumb", "age_display", "created_at", "updated_at")
    ordering        = ("last_name", "first_name")
    inlines         = [
        ChildInline, EmergencyContactInline, EducationBackgroundInline,
        EmploymentRecordInline, MinistryExperienceInline, MinisterSkillInline,
        MinistryRecordInline, AwardRecognitionInline, SeminarConferenceInline,
        CaseReportInline,
    ]

    fieldsets = (
        ("Personal Information", {
            "fields": (
                ("first_name", "middle_name", "last_name", "suffix"),
                "nickname", "date_of_birth", "age_display", "place_of_birth",
                "gender", "civil_status", "height_feet", "weight_kg",
                "church", "image_url", "get_photo_thumb", "biography",
            )
        }),
        ("Contact & Government IDs", {
            "fields": (
                "email", "telephone", "address", "present_address", "permanent_address",
                "passport_number", "sss_number", "philhealth", "tin",
            ),
        }),
        ("Family", {
            "fields": (
                "father_name", "father_province", "father_birthday", "father_occupation",
                "mother_name", "mother_province", "mother_birthday", "mother_occupation",
                "spouse_name", "spouse_province", "spouse_birthday", "spouse_occupation",
                "wedding_date",
            ),
            "classes": ("collapse",),
        }),
        ("Skills & Interests", {
            "fields": ("skills", "hobbies", "sports", "other_religious_secular_training"),
            "classes": ("collapse",),
        }),
        ("Certification", {
            "fields": ("certified_by", "signature_image_url", "signature_by_certified_image_url"),
            "classes": ("collapse",),
        }),
        ("Timestamps", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    def get_photo_thumb(self, obj):
        if obj.image_url:
            return format_html(
                '<img src="{}" style="width:40px;height:40px;border-radius:50%;object-fit:cover;">',
                obj.image_url
            )
        return format_html(
            '<div style="width:40px;height:40px;border-radius:50%;background:#e0ebff;'
            'display:flex;align-items:center;justify-content:center;'
            'font-weight:bold;color:#6272f5;font-size:14px;">{}</div>',
            obj.initials
        )
    get_photo_thumb.short_description = "Photo"

    def age_display(self, obj):
        age = obj.age
        return f"{age} years" if age is not None else "-"
    age_display.short_description = "Age"
