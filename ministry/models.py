from django.db import models
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
import datetime


year_validator = RegexValidator(r"^\d{4}$", "Enter a four-digit year.")


class Gender(models.TextChoices):
    MALE   = "male",   "Male"
    FEMALE = "female", "Female"


class CivilStatus(models.TextChoices):
    SINGLE    = "single",    "Single"
    MARRIED   = "married",   "Married"
    WIDOWED   = "widowed",   "Widowed"
    SEPARATED = "separated", "Separated"
    DIVORCED  = "divorced",  "Divorced"


# ──────────────────────────────────────────
# MINISTRY RANK
# ──────────────────────────────────────────
class MinistryRank(models.Model):
    name        = models.CharField(max_length=100, unique=True, verbose_name="Rank Name")
    description = models.TextField(max_length=500, blank=True, verbose_name="Description")
    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Ministry Rank"
        verbose_name_plural = "Ministry Ranks"
        ordering            = ["name"]

    def __str__(self):
        return self.name

    def get_minister_count(self):
        return self.experiences.values("minister").distinct().count()


# ──────────────────────────────────────────
# MINISTRY SKILL
# ──────────────────────────────────────────
class MinistrySkill(models.Model):
    name        = models.CharField(max_length=100, unique=True, verbose_name="Skill Name")
    description = models.TextField(max_length=500, verbose_name="Description")
    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Ministry Skill"
        verbose_name_plural = "Ministry Skills"
        ordering            = ["name"]

    def __str__(self):
        return self.name

    def get_minister_count(self):
        return self.assignments.values("minister").distinct().count()


# ──────────────────────────────────────────
# CHURCH
# ──────────────────────────────────────────
class Church(models.Model):
    name        = models.CharField(max_length=200, unique=True, verbose_name="Church Name")
    image_url   = models.URLField(max_length=500, blank=True, verbose_name="Image URL")
    latitude    = models.DecimalField(
        max_digits=9, decimal_places=6,
        blank=True, null=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
        verbose_name="Latitude"
    )
    longitude   = models.DecimalField(
        max_digits=9, decimal_places=6,
        blank=True, null=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
        verbose_name="Longitude"
    )
    address     = models.CharField(max_length=500, blank=True, verbose_name="Address")
    email       = models.EmailField(blank=True, verbose_name="Email")
    description = models.TextField(max_length=1000, blank=True, verbose_name="Description")
    link        = models.URLField(max_length=255, blank=True, verbose_name="Link")
    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Church"
        verbose_name_plural = "Churches"
        ordering            = ["name"]

    def __str__(self):
        return self.name

    def get_minister_count(self):
        return self.ministers.count()

    def clean(self):
        # Latitude and longitude travel together
        if (self.latitude is None) != (self.longitude is None):
            raise ValidationError("Latitude and longitude must both be set or both be empty.")

    @property
    def location(self):
        """Coordinates as a LatLng, or None when the church has no pin."""
        from .maps import LatLng

        if self.latitude is None or self.longitude is None:
            return None
        return LatLng(float(self.latitude), float(self.longitude))


# ──────────────────────────────────────────
# MINISTER
# ──────────────────────────────────────────
class Minister(models.Model):

    # ── Personal Information ──
    first_name     = models.CharField(max_length=100, verbose_name="First Name")
    last_name      = models.CharField(max_length=100, verbose_name="Last Name")
    middle_name    = models.CharField(max_length=100, blank=True, verbose_name="Middle Name")
    suffix         = models.CharField(max_length=20, blank=True, verbose_name="Suffix")
    nickname       = models.CharField(max_length=100, blank=True, verbose_name="Nickname")
    date_of_birth  = models.DateField(verbose_name="Date of Birth")
    place_of_birth = models.CharField(max_length=200, verbose_name="Place of Birth")
    gender         = models.CharField(max_length=6, choices=Gender.choices, verbose_name="Gender")
    height_feet    = models.CharField(max_length=20, verbose_name="Height (ft)")
    weight_kg      = models.CharField(max_length=20, verbose_name="Weight (kg)")
    civil_status   = models.CharField(
        max_length=10,
        choices=CivilStatus.choices,
        default=CivilStatus.SINGLE,
        verbose_name="Civil Status"
    )
    image_url      = models.URLField(max_length=500, blank=True, verbose_name="Photo URL")
    biography      = models.TextField(blank=True, verbose_name="Biography")
    church         = models.ForeignKey(
        Church, on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name="ministers",
        verbose_name="Church"
    )

    # ── Contact & Government IDs ──
    email             = models.EmailField(blank=True, verbose_name="Email")
    telephone         = models.CharField(max_length=30, blank=True, verbose_name="Telephone")
    address           = models.CharField(max_length=500, verbose_name="Address")
    present_address   = models.CharField(max_length=500, verbose_name="Present Address")
    permanent_address = models.CharField(max_length=500, blank=True, verbose_name="Permanent Address")
    passport_number   = models.CharField(max_length=50, blank=True, verbose_name="Passport Number")
    sss_number        = models.CharField(max_length=50, blank=True, verbose_name="SSS Number")
    philhealth        = models.CharField(max_length=50, blank=True, verbose_name="PhilHealth")
    tin               = models.CharField(max_length=50, blank=True, verbose_name="TIN")

    # ── Family ──
    father_name       = models.CharField(max_length=200, verbose_name="Father's Name")
    father_province   = models.CharField(max_length=100, verbose_name="Father's Province")
    father_birthday   = models.DateField(verbose_name="Father's Birthday")
    father_occupation = models.CharField(max_length=100, verbose_name="Father's Occupation")
    mother_name       = models.CharField(max_length=200, verbose_name="Mother's Name")
    mother_province   = models.CharField(max_length=100, verbose_name="Mother's Province")
    mother_birthday   = models.DateField(verbose_name="Mother's Birthday")
    mother_occupation = models.CharField(max_length=100, verbose_name="Mother's Occupation")
    spouse_name       = models.CharField(max_length=200, blank=True, verbose_name="Spouse's Name")
    spouse_province   = models.CharField(max_length=100, blank=True, verbose_name="Spouse's Province")
    spouse_birthday   = models.DateField(blank=True, null=True, verbose_name="Spouse's Birthday")
    spouse_occupation = models.CharField(max_length=100, blank=True, verbose_name="Spouse's Occupation")
    wedding_date      = models.DateField(blank=True, null=True, verbose_name="Wedding Date")

    # ── Skills & Interests ──
    skills                            = models.TextField(blank=True, verbose_name="Skills")
    hobbies                           = models.TextField(blank=True, verbose_name="Hobbies")
    sports                            = models.TextField(blank=True, verbose_name="Sports")
    other_religious_secular_training = models.TextField(
        blank=True, verbose_name="Other Religious / Secular Training"
    )

    # ── Certification ──
    certified_by                     = models.CharField(max_length=200, blank=True, verbose_name="Certified By")
    signature_image_url              = models.URLField(max_length=500, blank=True, verbose_name="Applicant Signature")
    signature_by_certified_image_url = models.URLField(max_length=500, blank=True, verbose_name="Certifier Signature")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name        = "Minister"
        verbose_name_plural = "Ministers"
        ordering            = ["-created_at"]
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="ministry_mi_last_na_5c1f0e_idx"),
            models.Index(fields=["civil_status"], name="ministry_mi_civil_s_8a2d41_idx"),
            models.Index(fields=["created_at"], name="ministry_mi_created_3b7e92_idx"),
        ]

    def __str__(self):
        return self.full_name

    def clean(self):
        errors = {}

        if self.civil_status == CivilStatus.SINGLE:
            if self.spouse_name or self.wedding_date:
                errors["spouse_name"] = "A single minister cannot have spouse details."

        if self.wedding_date and self.date_of_birth:
            if self.wedding_date < self.date_of_birth:
                errors["wedding_date"] = "Wedding date cannot be before date of birth."

        if errors:
            raise ValidationError(errors)

    @property
    def full_name(self):
        parts = [self.first_name, self.middle_name, self.last_name, self.suffix]
        return " ".join(p for p in parts if p)

    @property
    def is_married(self):
        return self.civil_status == CivilStatus.MARRIED

    @property
    def age(self):
        return self.age_on(datetime.date.today())

    def age_on(self, today):
        if not self.date_of_birth:
            return None
        return (
            today.year - self.date_of_birth.year
            - ((today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day))
        )

    @property
    def initials(self):
        """Two letters for the avatar placeholder."""
        if self.first_name and self.last_name:
            return (self.first_name[0] + self.last_name[0]).upper()
        return self.full_name[:2].upper()

    def days_until_birthday(self, today=None):
        if not self.date_of_birth:
            return None
        today = today or datetime.date.today()
        try:
            birthday = self.date_of_birth.replace(year=today.year)
        except ValueError:
            # 29 February outside a leap year
            birthday = datetime.date(today.year, 3, 1)
        if birthday < today:
            try:
                birthday = self.date_of_birth.replace(year=today.year + 1)
            except ValueError:
                birthday = datetime.date(today.year + 1, 3, 1)
        return (birthday - today).days


# ──────────────────────────────────────────
# MINISTER SUB-RECORDS
# ──────────────────────────────────────────
class MinisterRecord(models.Model):
    """Common columns for the ordered lists hanging off a minister."""

    sort_order = models.PositiveSmallIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["sort_order", "id"]


class Child(MinisterRecord):
    minister       = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="children")
    name           = models.CharField(max_length=200, verbose_name="Name")
    place_of_birth = models.CharField(max_length=200, verbose_name="Place of Birth")
    date_of_birth  = models.DateField(verbose_name="Date of Birth")
    gender         = models.CharField(max_length=6, choices=Gender.choices, verbose_name="Gender")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Child"
        verbose_name_plural = "Children"

    def __str__(self):
        return self.name


class EmergencyContact(MinisterRecord):
    minister       = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="emergency_contacts")
    name           = models.CharField(max_length=200, verbose_name="Name")
    relationship   = models.CharField(max_length=100, verbose_name="Relationship")
    address        = models.CharField(max_length=500, verbose_name="Address")
    contact_number = models.CharField(max_length=30, verbose_name="Contact Number")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Emergency Contact"
        verbose_name_plural = "Emergency Contacts"

    def __str__(self):
        return f"{self.name} ({self.relationship})"


class EducationBackground(MinisterRecord):
    minister               = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="education_backgrounds")
    school_name            = models.CharField(max_length=200, verbose_name="School Name")
    educational_attainment = models.CharField(max_length=100, verbose_name="Educational Attainment")
    date_graduated         = models.DateField(blank=True, null=True, verbose_name="Date Graduated")
    course                 = models.CharField(max_length=200, blank=True, verbose_name="Course")
    description            = models.TextField(blank=True, verbose_name="Description")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Education Background"
        verbose_name_plural = "Education Backgrounds"

    def __str__(self):
        return self.school_name


class EmploymentRecord(MinisterRecord):
    minister     = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="employment_records")
    company_name = models.CharField(max_length=200, verbose_name="Company Name")
    position     = models.CharField(max_length=200, verbose_name="Position")
    from_year    = models.CharField(max_length=4, validators=[year_validator], verbose_name="From")
    to_year      = models.CharField(max_length=4, blank=True, validators=[year_validator], verbose_name="To")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Employment Record"
        verbose_name_plural = "Employment Records"

    def __str__(self):
        return f"{self.position} at {self.company_name}"


class MinistryExperience(MinisterRecord):
    minister      = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="ministry_experiences")
    ministry_rank = models.ForeignKey(
        MinistryRank, on_delete=models.PROTECT,
        related_name="experiences",
        verbose_name="Ministry Rank"
    )
    from_year     = models.CharField(max_length=4, validators=[year_validator], verbose_name="From")
    to_year       = models.CharField(max_length=4, blank=True, validators=[year_validator], verbose_name="To")
    description   = models.TextField(blank=True, verbose_name="Description")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Ministry Experience"
        verbose_name_plural = "Ministry Experiences"

    def __str__(self):
        return f"{self.ministry_rank} ({self.from_year})"


class MinisterSkill(MinisterRecord):
    minister       = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="ministry_skills")
    ministry_skill = models.ForeignKey(
        MinistrySkill, on_delete=models.PROTECT,
        related_name="assignments",
        verbose_name="Ministry Skill"
    )

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Minister Skill"
        verbose_name_plural = "Minister Skills"

    def __str__(self):
        return str(self.ministry_skill)


class MinistryRecord(MinisterRecord):
    minister        = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="ministry_records")
    church_location = models.ForeignKey(
        Church, on_delete=models.PROTECT,
        related_name="ministry_records",
        verbose_name="Church"
    )
    from_year       = models.CharField(max_length=4, validators=[year_validator], verbose_name="From")
    to_year         = models.CharField(max_length=4, blank=True, validators=[year_validator], verbose_name="To")
    contribution    = models.TextField(blank=True, verbose_name="Contribution")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Ministry Record"
        verbose_name_plural = "Ministry Records"

    def __str__(self):
        return f"{self.church_location} ({self.from_year})"


class AwardRecognition(MinisterRecord):
    minister    = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="awards_recognitions")
    year        = models.CharField(max_length=4, validators=[year_validator], verbose_name="Year")
    description = models.TextField(verbose_name="Description")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Award / Recognition"
        verbose_name_plural = "Awards & Recognitions"

    def __str__(self):
        return f"{self.year}: {self.description[:40]}"


class SeminarConference(MinisterRecord):
    minister        = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="seminars_conferences")
    title           = models.CharField(max_length=200, verbose_name="Title")
    year            = models.CharField(max_length=4, validators=[year_validator], verbose_name="Year")
    number_of_hours = models.PositiveIntegerField(verbose_name="Number of Hours")
    place           = models.CharField(max_length=200, blank=True, verbose_name="Place")
    description     = models.TextField(blank=True, verbose_name="Description")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Seminar / Conference"
        verbose_name_plural = "Seminars & Conferences"

    def __str__(self):
        return self.title


class CaseReport(MinisterRecord):
    minister    = models.ForeignKey(Minister, on_delete=models.CASCADE, related_name="case_reports")
    year        = models.CharField(max_length=4, validators=[year_validator], verbose_name="Year")
    description = models.TextField(verbose_name="Description")

    class Meta(MinisterRecord.Meta):
        verbose_name        = "Case Report"
        verbose_name_plural = "Case Reports"

    def __str__(self):
        return f"{self.year}: {self.description[:40]}"
