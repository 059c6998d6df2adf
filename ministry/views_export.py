# ministry/views_export.py
"""
Excel exports of ministers, ministry ranks, ministry skills and churches.
"""

from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.text import slugify
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from .models import Church, Minister, MinistryRank, MinistrySkill
from .services import search_ministers, search_references


RANK_HEADERS = ['ID', 'Rank Name', 'Description', 'Ministers', 'Created Date/Time', 'Last Updated Date/Time']

SKILL_HEADERS = ['ID', 'Skill Name', 'Description', 'Ministers', 'Created Date/Time', 'Last Updated Date/Time']

CHURCH_HEADERS = [
    'ID', 'Name', 'Email', 'Address', 'Description', 'Link/Website',
    'Latitude', 'Longitude', 'Ministers', 'Created Date/Time', 'Last Updated Date/Time',
]

MINISTER_HEADERS = [
    'ID', 'First Name', 'Middle Name', 'Last Name', 'Suffix', 'Nickname',
    'Date of Birth', 'Place of Birth', 'Gender', 'Civil Status', 'Height (ft)', 'Weight (kg)',
    'Church', 'Email', 'Telephone', 'Address', 'Present Address', 'Permanent Address',
    'Passport Number', 'SSS Number', 'PhilHealth', 'TIN',
    "Father's Name", "Mother's Name", "Spouse's Name", 'Wedding Date',
    'Children', 'Ministry Ranks', 'Ministry Skills', 'Certified By',
    'Created Date/Time', 'Last Updated Date/Time',
]


def _datetime(value):
    return timezone.localtime(value).strftime('%Y-%m-%d %H:%M:%S') if value else ''


def _date(value):
    return value.isoformat() if value else ''


def build_workbook(title, headers, rows):
    """One styled sheet: coloured header row, auto-sized columns."""
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    header_fill = PatternFill(start_color="6272f5", end_color="6272f5", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)

    for col_num, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.fill = header_fill
        cell.font = header_font

    for row_num, row in enumerate(rows, 2):
        for col_num, value in enumerate(row, 1):
            ws.cell(row=row_num, column=col_num, value=value)

    # Adjust column widths
    for column in ws.columns:
        column_letter = column[0].column_letter
        max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
        ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    return wb


def workbook_response(wb, basename):
    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    stamp = timezone.localtime().strftime('%Y-%m-%d')
    response['Content-Disposition'] = f'attachment; filename={basename}_{stamp}.xlsx'
    wb.save(response)
    return response


def rank_rows(search=''):
    ranks = search_references(MinistryRank.objects.all(), search).annotate(
        minister_total=Count('experiences__minister', distinct=True)
    ).order_by('name')
    for rank in ranks:
        yield [
            rank.pk, rank.name, rank.description, rank.minister_total,
            _datetime(rank.created_at), _datetime(rank.updated_at),
        ]


def skill_rows(search=''):
    skills = search_references(MinistrySkill.objects.all(), search).annotate(
        minister_total=Count('assignments__minister', distinct=True)
    ).order_by('name')
    for skill in skills:
        yield [
            skill.pk, skill.name, skill.description, skill.minister_total,
            _datetime(skill.created_at), _datetime(skill.updated_at),
        ]


def church_rows(search=''):
    churches = search_references(
        Church.objects.all(), search, ('name', 'address', 'email')
    ).annotate(minister_total=Count('ministers', distinct=True)).order_by('name')
    for church in churches:
        yield [
            church.pk, church.name, church.email, church.address, church.description, church.link,
            '' if church.latitude is None else float(church.latitude),
            '' if church.longitude is None else float(church.longitude),
            church.minister_total,
            _datetime(church.created_at), _datetime(church.updated_at),
        ]


def minister_rows(search='', church=None):
    ministers = Minister.objects.select_related('church').prefetch_related(
        'children', 'ministry_experiences__ministry_rank', 'ministry_skills__ministry_skill'
    )
    if church is not None:
        ministers = ministers.filter(church=church)
    ministers = search_ministers(ministers, search).order_by('last_name', 'first_name')

    for m in ministers:
        yield [
            m.pk, m.first_name, m.middle_name, m.last_name, m.suffix, m.nickname,
            _date(m.date_of_birth), m.place_of_birth, m.get_gender_display(),
            m.get_civil_status_display(), m.height_feet, m.weight_kg,
            m.church.name if m.church else '', m.email, m.telephone,
            m.address, m.present_address, m.permanent_address,
            m.passport_number, m.sss_number, m.philhealth, m.tin,
            m.father_name, m.mother_name, m.spouse_name, _date(m.wedding_date),
            ', '.join(child.name for child in m.children.all()),
            ', '.join(exp.ministry_rank.name for exp in m.ministry_experiences.all()),
            ', '.join(skill.ministry_skill.name for skill in m.ministry_skills.all()),
            m.certified_by,
            _datetime(m.created_at), _datetime(m.updated_at),
        ]


@login_required
def export_ranks(request):
    """Download ministry ranks as .xlsx (honours ?search=)."""
    wb = build_workbook('Ministry Ranks', RANK_HEADERS, rank_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'ministry_ranks')


@login_required
def export_ministers(request):
    """Download ministers as .xlsx (honours ?search=)."""
    wb = build_workbook('Ministers', MINISTER_HEADERS, minister_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'ministers')


@login_required
def export_skills(request):
    """Download ministry skills as .xlsx (honours ?search=)."""
    wb = build_workbook('Ministry Skills', SKILL_HEADERS, skill_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'ministry_skills')


@login_required
def export_churches(request):
    """Download churches with their minister counts as .xlsx."""
    wb = build_workbook('Churches', CHURCH_HEADERS, church_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'churches')


def church_minister_workbook(church, search=''):
    wb = build_workbook('Ministers', MINISTER_HEADERS, minister_rows(search, church=church))
    return wb, f'{slugify(church.name) or "church"}_ministers'


@login_required
def export_church_ministers(request, pk):
    """Download the ministers designated to one church."""
    church = get_object_or_404(Church, pk=pk)
    wb, basename = church_minister_workbook(church, request.GET.get('search', '').strip())
    return workbook_response(wb, basename)
