"""
ministry/pdf.py

Printable "Ministry Application Form" for one minister.

build_sections() turns a draft into an ordered list of sections; the
wizard overview shows that list as HTML and MinisterPdfRenderer lays it
out on A4 with reportlab:

- header band on every page, title block on the first
- two-column fields with word wrap, a page break before anything that
  would run into the footer space
- footer "Ministry Application - <name> - Generated on <date>" and
  "Page i of n" on every page
"""
from collections import namedtuple
from io import BytesIO
from django.conf import settings
from django.utils import timezone
from PIL import Image
from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas
from .models import CivilStatus, Gender
import base64
import datetime
import logging
import requests

logger = logging.getLogger(__name__)


PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN        = 20 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
COLUMN_WIDTH  = CONTENT_WIDTH / 2 - 5 * mm
FOOTER_SPACE  = 30 * mm
TOP_OF_PAGE   = 30 * mm
LINE_HEIGHT   = 4.5 * mm

PRIMARY    = Color(65 / 255, 105 / 255, 225 / 255)
ACCENT     = Color(220 / 255, 220 / 255, 250 / 255)
TEXT       = Color(50 / 255, 50 / 255, 50 / 255)
LIGHT_TEXT = Color(100 / 255, 100 / 255, 100 / 255)
RULE       = Color(200 / 255, 200 / 255, 200 / 255)

UNKNOWN = "Unknown"
IMAGE_TIMEOUT = 10


Field    = namedtuple("Field", ["label", "value"])
Group    = namedtuple("Group", ["title", "fields"])
Picture  = namedtuple("Picture", ["url", "caption"])
Section  = namedtuple(
    "Section", ["title", "groups", "paragraphs", "photos", "signatures"], defaults=((), (), ())
)


# ════════════════════════════════════════════════════════════
# LOOKUPS & FORMATTING
# ════════════════════════════════════════════════════════════

def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class PdfLookups:
    """Display names for the ids a draft refers to."""

    def __init__(self, ranks=None, skills=None, churches=None):
        self.ranks = ranks or {}
        self.skills = skills or {}
        # church id -> (name, address)
        self.churches = churches or {}

    @classmethod
    def from_database(cls):
        from .models import Church, MinistryRank, MinistrySkill

        return cls(
            ranks=dict(MinistryRank.objects.values_list("id", "name")),
            skills=dict(MinistrySkill.objects.values_list("id", "name")),
            churches={
                pk: (name, address)
                for pk, name, address in Church.objects.values_list("id", "name", "address")
            },
        )

    def rank_name(self, pk):
        return self.ranks.get(_as_int(pk), UNKNOWN)

    def skill_name(self, pk):
        return self.skills.get(_as_int(pk), UNKNOWN)

    def church_name(self, pk):
        church = self.churches.get(_as_int(pk))
        return church[0] if church else UNKNOWN

    def church_address(self, pk):
        church = self.churches.get(_as_int(pk))
        return church[1] if church else ""

    def church_label(self, pk):
        church = self.churches.get(_as_int(pk))
        if not church:
            return UNKNOWN
        name, address = church
        return f"{name} - {address}" if address else name


def parse_date(value):
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def format_date(value, pattern="%b %d, %Y"):
    parsed = parse_date(value)
    return parsed.strftime(pattern) if parsed else ""


def format_period(from_year, to_year):
    if not from_year:
        return ""
    return f"{from_year} - {to_year or 'Present'}"


def _label(choices, value):
    try:
        return choices(value).label
    except ValueError:
        return str(value or "")


def full_name(draft):
    parts = [draft.get(k) for k in ("first_name", "middle_name", "last_name", "suffix")]
    return " ".join(str(p) for p in parts if p)


def _fields(*pairs):
    """Drop blank values so empty optionals never print."""
    return [Field(label, str(value)) for label, value in pairs if value not in (None, "")]


def _group(title, *pairs):
    return Group(title, _fields(*pairs))


def _entries(draft, key):
    return [entry for entry in (draft.get(key) or []) if isinstance(entry, dict)]


# ════════════════════════════════════════════════════════════
# SECTIONS
# ════════════════════════════════════════════════════════════

def build_sections(draft, lookups=None):
    """
    Ordered printable sections for a draft.

    List sections with no entries are left out. Spouse details only
    appear for a married minister.
    """
    lookups = lookups or PdfLookups()
    sections = []

    church = draft.get("church")
    if church:
        sections.append(Section("CHURCH DESIGNATION", [
            _group(None, ("Church Name", lookups.church_name(church)),
                   ("Church Address", lookups.church_address(church))),
        ]))

    height = draft.get("height_feet")
    weight = draft.get("weight_kg")
    sections.append(Section(
        "PERSONAL INFORMATION",
        [_group(
            None,
            ("Full Name", full_name(draft)),
            ("Nickname", draft.get("nickname")),
            ("Date of Birth", format_date(draft.get("date_of_birth"))),
            ("Place of Birth", draft.get("place_of_birth")),
            ("Gender", _label(Gender, draft.get("gender")) if draft.get("gender") else ""),
            ("Civil Status", _label(CivilStatus, draft.get("civil_status")) if draft.get("civil_status") else ""),
            ("Height", f"{height} ft" if height else ""),
            ("Weight", f"{weight} kg" if weight else ""),
        )],
        paragraphs=_fields(("Biography", draft.get("biography"))),
        photos=[Picture(draft["image_url"], "Profile Photo")] if draft.get("image_url") else [],
    ))

    sections.append(Section("CONTACT & GOVERNMENT INFORMATION", [_group(
        None,
        ("Email Address", draft.get("email")),
        ("Telephone", draft.get("telephone")),
        ("Current Address", draft.get("address")),
        ("Present Address", draft.get("present_address")),
        ("Permanent Address", draft.get("permanent_address") or "Same as present address"),
        ("Passport Number", draft.get("passport_number")),
        ("SSS Number", draft.get("sss_number")),
        ("PhilHealth", draft.get("philhealth")),
        ("TIN", draft.get("tin")),
    )]))

    family = []
    for title, prefix in (("Father Information", "father"), ("Mother Information", "mother")):
        family.append(_group(
            title,
            ("Name", draft.get(f"{prefix}_name")),
            ("Province", draft.get(f"{prefix}_province")),
            ("Birthday", format_date(draft.get(f"{prefix}_birthday"))),
            ("Occupation", draft.get(f"{prefix}_occupation")),
        ))
    if draft.get("civil_status") == CivilStatus.MARRIED:
        family.append(_group(
            "Spouse Information",
            ("Name", draft.get("spouse_name")),
            ("Province", draft.get("spouse_province")),
            ("Birthday", format_date(draft.get("spouse_birthday"))),
            ("Occupation", draft.get("spouse_occupation")),
            ("Wedding Date", format_date(draft.get("wedding_date"))),
        ))
    for index, child in enumerate(_entries(draft, "children"), start=1):
        family.append(_group(
            f"Child {index}",
            ("Name", child.get("name")),
            ("Date of Birth", format_date(child.get("date_of_birth"))),
            ("Gender", _label(Gender, child.get("gender")) if child.get("gender") else ""),
            ("Place of Birth", child.get("place_of_birth")),
        ))
    sections.append(Section("FAMILY INFORMATION", family))

    def list_section(title, key, make_group):
        groups = [make_group(index, entry) for index, entry in enumerate(_entries(draft, key), start=1)]
        if groups:
            sections.append(Section(title, groups))

    list_section("EMERGENCY CONTACTS", "emergency_contacts", lambda i, e: _group(
        f"Contact {i}",
        ("Name", e.get("name")),
        ("Relationship", e.get("relationship")),
        ("Address", e.get("address")),
        ("Contact Number", e.get("contact_number")),
    ))

    interests = _group(
        None,
        ("Skills", draft.get("skills")),
        ("Hobbies", draft.get("hobbies")),
        ("Sports", draft.get("sports")),
        ("Other Training", draft.get("other_religious_secular_training")),
    )
    if interests.fields:
        sections.append(Section("SKILLS & INTERESTS", [interests]))

    list_section("EDUCATIONAL BACKGROUND", "education_backgrounds", lambda i, e: _group(
        f"Education {i}",
        ("School", e.get("school_name")),
        ("Attainment", e.get("educational_attainment")),
        ("Course", e.get("course")),
        ("Date Graduated", format_date(e.get("date_graduated"))),
        ("Description", e.get("description")),
    ))

    list_section("EMPLOYMENT HISTORY", "employment_records", lambda i, e: _group(
        f"Employment {i}",
        ("Company", e.get("company_name")),
        ("Position", e.get("position")),
        ("Period", format_period(e.get("from_year"), e.get("to_year"))),
    ))

    list_section("MINISTRY EXPERIENCE", "ministry_experiences", lambda i, e: _group(
        f"Experience {i}",
        ("Ministry Rank", lookups.rank_name(e.get("ministry_rank"))),
        ("Period", format_period(e.get("from_year"), e.get("to_year"))),
        ("Description", e.get("description")),
    ))

    skills = _entries(draft, "ministry_skills")
    if skills:
        sections.append(Section("MINISTRY SKILLS", [_group(
            None, *[(f"Skill {i}", lookups.skill_name(e.get("ministry_skill"))) for i, e in enumerate(skills, start=1)]
        )]))

    list_section("MINISTRY RECORDS", "ministry_records", lambda i, e: _group(
        f"Record {i}",
        ("Church", lookups.church_label(e.get("church_location"))),
        ("Period", format_period(e.get("from_year"), e.get("to_year"))),
        ("Contribution", e.get("contribution")),
    ))

    list_section("AWARDS & RECOGNITIONS", "awards_recognitions", lambda i, e: _group(
        f"Award {i}",
        ("Year", e.get("year")),
        ("Description", e.get("description")),
    ))

    list_section("SEMINARS & CONFERENCES", "seminars_conferences", lambda i, e: _group(
        f"Seminar {i}",
        ("Title", e.get("title")),
        ("Year", e.get("year")),
        ("Hours", e.get("number_of_hours")),
        ("Place", e.get("place")),
        ("Description", e.get("description")),
    ))

    list_section("CASE REPORTS", "case_reports", lambda i, e: _group(
        f"Case Report {i}",
        ("Year", e.get("year")),
        ("Description", e.get("description")),
    ))

    signatures = [
        Picture(draft[key], caption)
        for key, caption in (
            ("signature_image_url", "Applicant Signature"),
            ("signature_by_certified_image_url", "Certifier Signature"),
        )
        if draft.get(key)
    ]
    if draft.get("certified_by") or signatures:
        sections.append(Section(
            "CERTIFICATION",
            [_group(None, ("Certified By", draft.get("certified_by")))],
            signatures=signatures,
        ))

    return sections


# ════════════════════════════════════════════════════════════
# IMAGES
# ════════════════════════════════════════════════════════════

def download_image(url):
    """Raw bytes for an http(s) or data: image URL."""
    if url.startswith("data:"):
        _, _, encoded = url.partition(",")
        return base64.b64decode(encoded)
    response = requests.get(url, timeout=IMAGE_TIMEOUT)
    response.raise_for_status()
    return response.content


def load_image(url, fetch=download_image):
    """
    ImageReader for `url`, or None when it cannot be fetched or decoded.
    A broken image never stops the document.
    """
    try:
        raw = fetch(url)
        with Image.open(BytesIO(raw)) as probe:
            probe.verify()
        picture = Image.open(BytesIO(raw)).convert("RGB")
        return ImageReader(picture)
    except Exception as e:
        logger.warning(f"Skipping image {url[:80]}: {e}")
        return None


# ════════════════════════════════════════════════════════════
# RENDERING
# ════════════════════════════════════════════════════════════

class NumberedCanvas(canvas.Canvas):
    """Canvas that defers footers until the page total is known."""

    def __init__(self, *args, footer_text="", **kwargs):
        super().__init__(*args, **kwargs)
        self.footer_text = footer_text
        self.page_count = 0
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_footer(total)
            super().showPage()
        # restoring page states rewinds every attribute, page_count included
        self.page_count = total
        super().save()

    def draw_footer(self, total):
        self.saveState()
        self.setStrokeColor(RULE)
        self.setLineWidth(0.3 * mm)
        self.line(MARGIN, 20 * mm, PAGE_WIDTH - MARGIN, 20 * mm)
        self.setFont("Helvetica", 8)
        self.setFillColor(LIGHT_TEXT)
        self.drawString(MARGIN, 12 * mm, self.footer_text)
        self.drawRightString(PAGE_WIDTH - MARGIN, 12 * mm, f"Page {self._pageNumber} of {total}")
        self.restoreState()


class MinisterPdfRenderer:
    """
    Lays the sections of one draft out on A4 pages.

    `y` is the distance from the top of the page, in points.
    """

    def __init__(self, draft, lookups=None, fetch_image=None, church_title=None, generated_at=None):
        self.draft = draft
        self.lookups = lookups or PdfLookups()
        self.fetch_image = fetch_image or download_image
        self.church_title = church_title or settings.MINISTRY_CHURCH_NAME
        self.generated_at = generated_at or timezone.localtime()
        self.name = full_name(draft) or "Unnamed Minister"
        self.page_count = 0
        self.y = TOP_OF_PAGE

    def render(self):
        buffer = BytesIO()
        footer = (
            f"Ministry Application - {self.name} - "
            f"Generated on {self.generated_at.strftime('%b %d, %Y')}"
        )
        self.c = NumberedCanvas(buffer, pagesize=A4, footer_text=footer)
        self.c.setTitle(f"Ministry Application - {self.name}")
        self.c.setAuthor(self.church_title)

        self.draw_page_header()
        self.draw_title_block()
        for section in build_sections(self.draft, self.lookups):
            self.draw_section(section)

        self.c.showPage()
        self.c.save()
        self.page_count = self.c.page_count
        return buffer.getvalue()

    # ── Page infrastructure ──

    def _baseline(self, y):
        return PAGE_HEIGHT - y

    def draw_page_header(self):
        self.c.saveState()
        self.c.setFillColor(ACCENT)
        self.c.rect(0, self._baseline(20 * mm), PAGE_WIDTH, 20 * mm, fill=1, stroke=0)
        self.c.setFont("Helvetica-Bold", 16)
        self.c.setFillColor(PRIMARY)
        self.c.drawCentredString(PAGE_WIDTH / 2, self._baseline(15 * mm), self.church_title)
        self.c.setStrokeColor(PRIMARY)
        self.c.setLineWidth(0.5 * mm)
        self.c.line(MARGIN, self._baseline(22 * mm), PAGE_WIDTH - MARGIN, self._baseline(22 * mm))
        self.c.restoreState()

    def check_page_break(self, required=25 * mm):
        """Start a new page when `required` would reach the footer space."""
        if self.y + required > PAGE_HEIGHT - MARGIN - FOOTER_SPACE:
            self.c.showPage()
            self.draw_page_header()
            self.y = TOP_OF_PAGE
            return True
        return False

    # ── Blocks ──

    def draw_title_block(self):
        self.check_page_break(30 * mm)
        title = "MINISTRY APPLICATION FORM"
        self.c.setFont("Helvetica-Bold", 18)
        self.c.setFillColor(PRIMARY)
        width = self.c.stringWidth(title, "Helvetica-Bold", 18)
        left = (PAGE_WIDTH - width) / 2
        self.c.drawString(left, self._baseline(self.y), title)
        self.c.setStrokeColor(PRIMARY)
        self.c.setLineWidth(0.3 * mm)
        self.c.line(left, self._baseline(self.y + 2 * mm), left + width, self._baseline(self.y + 2 * mm))
        self.y += 20 * mm

        self.c.setFont("Helvetica-Bold", 14)
        self.c.drawCentredString(PAGE_WIDTH / 2, self._baseline(self.y), self.name)
        self.y += 10 * mm

        self.c.setFont("Helvetica", 9)
        self.c.setFillColor(LIGHT_TEXT)
        self.c.drawCentredString(
            PAGE_WIDTH / 2, self._baseline(self.y),
            f"Generated on {self.generated_at.strftime('%B %d, %Y')}",
        )
        self.y += 15 * mm

    def draw_section(self, section):
        self.draw_section_header(section.title)
        for picture in section.photos:
            self.draw_photo(picture)
        for group in section.groups:
            self.draw_group(group)
        for field in section.paragraphs:
            self.draw_paragraph(field)
        if section.signatures:
            self.draw_signatures(section.signatures)
        self.y += 5 * mm

    def draw_section_header(self, title):
        self.check_page_break(15 * mm)
        self.y += 10 * mm
        self.c.setFillColor(ACCENT)
        self.c.rect(MARGIN, self._baseline(self.y + 5 * mm), CONTENT_WIDTH, 10 * mm, fill=1, stroke=0)
        self.c.setFont("Helvetica-Bold", 12)
        self.c.setFillColor(PRIMARY)
        self.c.drawString(MARGIN + 5 * mm, self._baseline(self.y + 2 * mm), title)
        self.y += 12 * mm

    def draw_group(self, group):
        if not group.fields:
            return
        if group.title:
            self.check_page_break(20 * mm)
            self.c.setFont("Helvetica-Bold", 11)
            self.c.setFillColor(PRIMARY)
            self.c.drawString(MARGIN, self._baseline(self.y), group.title)
            self.y += 8 * mm

        for start in range(0, len(group.fields), 2):
            row = group.fields[start:start + 2]
            wrapped = [simpleSplit(f.value, "Helvetica", 10, COLUMN_WIDTH - 15 * mm) for f in row]
            height = max(max(10 * mm, len(lines) * LINE_HEIGHT + 5 * mm) for lines in wrapped)
            self.check_page_break(height)
            for column, (field, lines) in enumerate(zip(row, wrapped)):
                x = MARGIN + 5 * mm if column == 0 else MARGIN + COLUMN_WIDTH + 10 * mm
                self.draw_field(x, field.label, lines)
            self.y += height + 2 * mm
        self.y += 3 * mm

    def draw_field(self, x, label, lines):
        self.c.setFont("Helvetica-Bold", 10)
        self.c.setFillColor(TEXT)
        self.c.drawString(x, self._baseline(self.y), f"{label}:")
        self.c.setFont("Helvetica", 10)
        for offset, line in enumerate(lines, start=1):
            self.c.drawString(x + 2 * mm, self._baseline(self.y + offset * LINE_HEIGHT), line)

    def draw_paragraph(self, field):
        lines = simpleSplit(field.value, "Helvetica", 10, CONTENT_WIDTH)
        self.check_page_break(min(len(lines) * LINE_HEIGHT + 12 * mm, 60 * mm))
        self.c.setFont("Helvetica-Bold", 10)
        self.c.setFillColor(TEXT)
        self.c.drawString(MARGIN, self._baseline(self.y), f"{field.label}:")
        self.y += 6 * mm
        self.c.setFont("Helvetica", 10)
        for line in lines:
            self.check_page_break(LINE_HEIGHT)
            self.c.drawString(MARGIN, self._baseline(self.y), line)
            self.y += LINE_HEIGHT
        self.y += 6 * mm

    def draw_photo(self, picture, width=35 * mm, height=45 * mm):
        image = load_image(picture.url, self.fetch_image)
        if image is None:
            return
        self.check_page_break(height + 15 * mm)
        x = (PAGE_WIDTH - width) / 2
        self.c.setStrokeColor(RULE)
        self.c.setLineWidth(0.2 * mm)
        self.c.rect(x - 1 * mm, self._baseline(self.y + height + 1 * mm), width + 2 * mm, height + 2 * mm)
        self.c.drawImage(image, x, self._baseline(self.y + height), width, height)
        self.c.setFont("Helvetica-Oblique", 8)
        self.c.setFillColor(LIGHT_TEXT)
        self.c.drawCentredString(PAGE_WIDTH / 2, self._baseline(self.y + height + 5 * mm), picture.caption)
        self.y += height + 12 * mm

    def draw_signatures(self, signatures, width=60 * mm, height=25 * mm, spacing=40 * mm):
        self.check_page_break(60 * mm)
        self.c.setFont("Helvetica-Bold", 11)
        self.c.setFillColor(TEXT)
        self.c.drawString(MARGIN, self._baseline(self.y), "Signatures:")
        self.y += 10 * mm

        for column, picture in enumerate(signatures):
            x = MARGIN + column * (width + spacing)
            self.c.setFont("Helvetica", 10)
            self.c.setFillColor(TEXT)
            self.c.drawString(x, self._baseline(self.y), f"{picture.caption}:")
            image = load_image(picture.url, self.fetch_image)
            if image is not None:
                self.c.drawImage(image, x, self._baseline(self.y + 5 * mm + height), width, height)
        self.y += height + 15 * mm


def render_minister_pdf(draft, lookups=None, fetch_image=None, generated_at=None):
    """PDF bytes for `draft`."""
    return MinisterPdfRenderer(draft, lookups, fetch_image, generated_at=generated_at).render()


def pdf_filename(draft, generated_at=None):
    generated_at = generated_at or timezone.localtime()
    name = "_".join((full_name(draft) or "Minister").split())
    return f"Ministry_Application_{name}_{generated_at.strftime('%Y-%m-%d_%H-%M-%S')}.pdf"
