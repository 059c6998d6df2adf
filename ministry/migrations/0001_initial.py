# Generated migration file
# ministry/migrations/0001_initial.py

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def year_field(blank=False, verbose_name="Year"):
    return models.CharField(
        blank=blank,
        max_length=4,
        validators=[django.core.validators.RegexValidator("^\\d{4}$", "Enter a four-digit year.")],
        verbose_name=verbose_name,
    )


def record_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("sort_order", models.PositiveSmallIntegerField(default=0, editable=False)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


def minister_fk(related_name):
    return (
        "minister",
        models.ForeignKey(
            on_delete=django.db.models.deletion.CASCADE,
            related_name=related_name,
            to="ministry.minister",
        ),
    )


GENDER_CHOICES = [("male", "Male"), ("female", "Female")]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MinistryRank",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Rank Name")),
                ("description", models.TextField(blank=True, max_length=500, verbose_name="Description")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Ministry Rank",
                "verbose_name_plural": "Ministry Ranks",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="MinistrySkill",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Skill Name")),
                ("description", models.TextField(max_length=500, verbose_name="Description")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Ministry Skill",
                "verbose_name_plural": "Ministry Skills",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Church",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True, verbose_name="Church Name")),
                ("image_url", models.URLField(blank=True, max_length=500, verbose_name="Image URL")),
                ("latitude", models.DecimalField(
                    blank=True, decimal_places=6, max_digits=9, null=True,
                    validators=[
                        django.core.validators.MinValueValidator(-90),
                        django.core.validators.MaxValueValidator(90),
                    ],
                    verbose_name="Latitude",
                )),
                ("longitude", models.DecimalField(
                    blank=True, decimal_places=6, max_digits=9, null=True,
                    validators=[
                        django.core.validators.MinValueValidator(-180),
                        django.core.validators.MaxValueValidator(180),
                    ],
                    verbose_name="Longitude",
                )),
                ("address", models.CharField(blank=True, max_length=500, verbose_name="Address")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("description", models.TextField(blank=True, max_length=1000, verbose_name="Description")),
                ("link", models.URLField(blank=True, max_length=255, verbose_name="Link")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Church",
                "verbose_name_plural": "Churches",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Minister",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100, verbose_name="First Name")),
                ("last_name", models.CharField(max_length=100, verbose_name="Last Name")),
                ("middle_name", models.CharField(blank=True, max_length=100, verbose_name="Middle Name")),
                ("suffix", models.CharField(blank=True, max_length=20, verbose_name="Suffix")),
                ("nickname", models.CharField(blank=True, max_length=100, verbose_name="Nickname")),
                ("date_of_birth", models.DateField(verbose_name="Date of Birth")),
                ("place_of_birth", models.CharField(max_length=200, verbose_name="Place of Birth")),
                ("gender", models.CharField(choices=GENDER_CHOICES, max_length=6, verbose_name="Gender")),
                ("height_feet", models.CharField(max_length=20, verbose_name="Height (ft)")),
                ("weight_kg", models.CharField(max_length=20, verbose_name="Weight (kg)")),
                ("civil_status", models.CharField(
                    choices=[
                        ("single", "Single"),
                        ("married", "Married"),
                        ("widowed", "Widowed"),
                        ("separated", "Separated"),
                        ("divorced", "Divorced"),
                    ],
                    default="single",
                    max_length=10,
                    verbose_name="Civil Status",
                )),
                ("image_url", models.URLField(blank=True, max_length=500, verbose_name="Photo URL")),
                ("biography", models.TextField(blank=True, verbose_name="Biography")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("telephone", models.CharField(blank=True, max_length=30, verbose_name="Telephone")),
                ("address", models.CharField(max_length=500, verbose_name="Address")),
                ("present_address", models.CharField(max_length=500, verbose_name="Present Address")),
                ("permanent_address", models.CharField(blank=True, max_length=500, verbose_name="Permanent Address")),
                ("passport_number", models.CharField(blank=True, max_length=50, verbose_name="Passport Number")),
                ("sss_number", models.CharField(blank=True, max_length=50, verbose_name="SSS Number")),
                ("philhealth", models.CharField(blank=True, max_length=50, verbose_name="PhilHealth")),
                ("tin", models.CharField(blank=True, max_length=50, verbose_name="TIN")),
                ("father_name", models.CharField(max_length=200, verbose_name="Father's Name")),
                ("father_province", models.CharField(max_length=100, verbose_name="Father's Province")),
                ("father_birthday", models.DateField(verbose_name="Father's Birthday")),
                ("father_occupation", models.CharField(max_length=100, verbose_name="Father's Occupation")),
                ("mother_name", models.CharField(max_length=200, verbose_name="Mother's Name")),
                ("mother_province", models.CharField(max_length=100, verbose_name="Mother's Province")),
                ("mother_birthday", models.DateField(verbose_name="Mother's Birthday")),
                ("mother_occupation", models.CharField(max_length=100, verbose_name="Mother's Occupation")),
                ("spouse_name", models.CharField(blank=True, max_length=200, verbose_name="Spouse's Name")),
                ("spouse_province", models.CharField(blank=True, max_length=100, verbose_name="Spouse's Province")),
                ("spouse_birthday", models.DateField(blank=True, null=True, verbose_name="Spouse's Birthday")),
                ("spouse_occupation", models.CharField(blank=True, max_length=100, verbose_name="Spouse's Occupation")),
                ("wedding_date", models.DateField(blank=True, null=True, verbose_name="Wedding Date")),
                ("skills", models.TextField(blank=True, verbose_name="Skills")),
                ("hobbies", models.TextField(blank=True, verbose_name="Hobbies")),
                ("sports", models.TextField(blank=True, verbose_name="Sports")),
                ("other_religious_secular_training", models.TextField(
                    blank=True, verbose_name="Other Religious / Secular Training"
                )),
                ("certified_by", models.CharField(blank=True, max_length=200, verbose_name="Certified By")),
                ("signature_image_url", models.URLField(blank=True, max_length=500, verbose_name="Applicant Signature")),
                ("signature_by_certified_image_url", models.URLField(
                    blank=True, max_length=500, verbose_name="Certifier Signature"
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("church", models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="ministers",
                    to="ministry.church",
                    verbose_name="Church",
                )),
            ],
            options={
                "verbose_name": "Minister",
                "verbose_name_plural": "Ministers",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["last_name", "first_name"], name="ministry_mi_last_na_5c1f0e_idx"),
                    models.Index(fields=["civil_status"], name="ministry_mi_civil_s_8a2d41_idx"),
                    models.Index(fields=["created_at"], name="ministry_mi_created_3b7e92_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Child",
            fields=record_fields() + [
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                ("place_of_birth", models.CharField(max_length=200, verbose_name="Place of Birth")),
                ("date_of_birth", models.DateField(verbose_name="Date of Birth")),
                ("gender", models.CharField(choices=GENDER_CHOICES, max_length=6, verbose_name="Gender")),
                minister_fk("children"),
            ],
            options={
                "verbose_name": "Child",
                "verbose_name_plural": "Children",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="EmergencyContact",
            fields=record_fields() + [
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                ("relationship", models.CharField(max_length=100, verbose_name="Relationship")),
                ("address", models.CharField(max_length=500, verbose_name="Address")),
                ("contact_number", models.CharField(max_length=30, verbose_name="Contact Number")),
                minister_fk("emergency_contacts"),
            ],
            options={
                "verbose_name": "Emergency Contact",
                "verbose_name_plural": "Emergency Contacts",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="EducationBackground",
            fields=record_fields() + [
                ("school_name", models.CharField(max_length=200, verbose_name="School Name")),
                ("educational_attainment", models.CharField(max_length=100, verbose_name="Educational Attainment")),
                ("date_graduated", models.DateField(blank=True, null=True, verbose_name="Date Graduated")),
                ("course", models.CharField(blank=True, max_length=200, verbose_name="Course")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                minister_fk("education_backgrounds"),
            ],
            options={
                "verbose_name": "Education Background",
                "verbose_name_plural": "Education Backgrounds",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="EmploymentRecord",
            fields=record_fields() + [
                ("company_name", models.CharField(max_length=200, verbose_name="Company Name")),
                ("position", models.CharField(max_length=200, verbose_name="Position")),
                ("from_year", year_field(verbose_name="From")),
                ("to_year", year_field(blank=True, verbose_name="To")),
                minister_fk("employment_records"),
            ],
            options={
                "verbose_name": "Employment Record",
                "verbose_name_plural": "Employment Records",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="MinistryExperience",
            fields=record_fields() + [
                ("from_year", year_field(verbose_name="From")),
                ("to_year", year_field(blank=True, verbose_name="To")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                minister_fk("ministry_experiences"),
                ("ministry_rank", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="experiences",
                    to="ministry.ministryrank",
                    verbose_name="Ministry Rank",
                )),
            ],
            options={
                "verbose_name": "Ministry Experience",
                "verbose_name_plural": "Ministry Experiences",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="MinisterSkill",
            fields=record_fields() + [
                minister_fk("ministry_skills"),
                ("ministry_skill", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="assignments",
                    to="ministry.ministryskill",
                    verbose_name="Ministry Skill",
                )),
            ],
            options={
                "verbose_name": "Minister Skill",
                "verbose_name_plural": "Minister Skills",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="MinistryRecord",
            fields=record_fields() + [
                ("from_year", year_field(verbose_name="From")),
                ("to_year", year_field(blank=True, verbose_name="To")),
                ("contribution", models.TextField(blank=True, verbose_name="Contribution")),
                ("church_location", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="ministry_records",
                    to="ministry.church",
                    verbose_name="Church",
                )),
                minister_fk("ministry_records"),
            ],
            options={
                "verbose_name": "Ministry Record",
                "verbose_name_plural": "Ministry Records",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="AwardRecognition",
            fields=record_fields() + [
                ("year", year_field()),
                ("description", models.TextField(verbose_name="Description")),
                minister_fk("awards_recognitions"),
            ],
            options={
                "verbose_name": "Award / Recognition",
                "verbose_name_plural": "Awards & Recognitions",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="SeminarConference",
            fields=record_fields() + [
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                ("year", year_field()),
                ("number_of_hours", models.PositiveIntegerField(verbose_name="Number of Hours")),
                ("place", models.CharField(blank=True, max_length=200, verbose_name="Place")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                minister_fk("seminars_conferences"),
            ],
            options={
                "verbose_name": "Seminar / Conference",
                "verbose_name_plural": "Seminars & Conferences",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="CaseReport",
            fields=record_fields() + [
                ("year", year_field()),
                ("description", models.TextField(verbose_name="Description")),
                minister_fk("case_reports"),
            ],
            options={
                "verbose_name": "Case Report",
                "verbose_name_plural": "Case Reports",
                "ordering": ["sort_order", "id"],
                "abstract": False,
            },
        ),
    ]
