# ministry/api.py
"""
JSON API for ministers, ministry ranks, skills and churches.

Every answer uses the same envelope:
    {"success": true,  "data": ..., "message": "..."}
    {"success": false, "error": "...", "details": [{"field", "message"}]}
List answers add `pagination`, `search` and `sort`.
"""

from functools import wraps
from django.db.models import Count
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from .forms import MinistryRankForm, MinistrySkillForm
from .models import Church, Minister, MinistryRank, MinistrySkill
from .serializers import minister_to_dict, reference_to_dict
from .services import (
    CHURCH_MINISTER_SEARCH_FIELDS, CHURCH_MINISTER_SORT_FIELDS, MINISTER_SORT_FIELDS,
    REFERENCE_SORT_FIELDS, InvalidPayload, NotFound, ServiceError,
    apply_sort, create_minister, delete_minister, delete_reference, find_ministers_by_name,
    paginate, parse_list_query, save_reference, search_ministers, search_references, update_minister,
)
from .views_export import (
    CHURCH_HEADERS, MINISTER_HEADERS, RANK_HEADERS, SKILL_HEADERS, build_workbook,
    church_minister_workbook, church_rows, minister_rows, rank_rows, skill_rows, workbook_response,
)
import json
import logging

logger = logging.getLogger(__name__)


RANK_FIELDS   = ('name', 'description')
SKILL_FIELDS  = ('name', 'description')
CHURCH_FIELDS = ('name', 'image_url', 'latitude', 'longitude', 'address', 'email', 'description', 'link')


# ════════════════════════════════════════════════════════════
# ENVELOPE
# ════════════════════════════════════════════════════════════
def success(data=None, message=None, status=200, **extra):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    body.update(extra)
    return JsonResponse(body, status=status)


def failure(error, status=400, details=None):
    body = {'success': False, 'error': error}
    if details:
        body['details'] = details
    return JsonResponse(body, status=status)


def list_response(items, pagination, query):
    return success(
        items,
        pagination=pagination,
        search=query.search,
        sort={'by': query.sort_by, 'order': query.sort_order},
    )


def api_view(methods):
    """
    Wrap an API view: login check, allowed methods, CSRF exemption and
    the mapping of raised errors onto envelope responses.
    """
    def decorator(view):
        @csrf_exempt
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return failure('Authentication required', status=401)
            if request.method not in methods:
                return failure(f'Method {request.method} not allowed', status=405)
            try:
                return view(request, *args, **kwargs)
            except ServiceError as exc:
                return failure(exc.message, status=exc.status, details=exc.details)
            except Exception:
                logger.exception(f'Unhandled API error on {request.method} {request.path}')
                return failure('Internal server error', status=500)
        return wrapper
    return decorator


def read_json(request):
    """The request body as a dict; InvalidPayload when it is not a JSON object."""
    try:
        data = json.loads(request.body or b'{}')
    except (UnicodeDecodeError, ValueError) as exc:
        raise InvalidPayload('Request body must be valid JSON') from exc
    if not isinstance(data, dict):
        raise InvalidPayload('Request body must be a JSON object')
    return data


def parse_id(raw, label):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = 0
    if value < 1:
        raise InvalidPayload(f'Invalid {label} ID')
    return value


def get_or_404(queryset, pk, label):
    try:
        return queryset.get(pk=pk)
    except queryset.model.DoesNotExist:
        raise NotFound(f'{label.capitalize()} not found') from None


# ════════════════════════════════════════════════════════════
# MINISTERS
# ════════════════════════════════════════════════════════════
@api_view(['GET', 'POST'])
def minister_collection(request):
    """GET: paginated list (no sub-lists). POST: create with sub-lists."""
    if request.method == 'POST':
        minister = create_minister(read_json(request))
        return success(minister_to_dict(minister), 'Minister created successfully', status=201)

    query = parse_list_query(request.GET, MINISTER_SORT_FIELDS)
    ministers = Minister.objects.select_related('church')
    if query.search:
        ministers = search_ministers(ministers, query.search)
    items, pagination = paginate(apply_sort(ministers, query), query)
    return list_response([minister_to_dict(m, include_lists=False) for m in items], pagination, query)


@api_view(['GET', 'PUT', 'DELETE'])
def minister_detail(request, minister_id):
    pk = parse_id(minister_id, 'minister')
    minister = get_or_404(Minister.objects.select_related('church'), pk, 'minister')

    if request.method == 'PUT':
        minister = update_minister(minister, read_json(request))
        return success(minister_to_dict(minister), 'Minister updated successfully')

    if request.method == 'DELETE':
        delete_minister(minister)
        return success(message='Minister deleted successfully')

    return success(minister_to_dict(minister))


@api_view(['GET'])
def minister_export(request):
    wb = build_workbook('Ministers', MINISTER_HEADERS, minister_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'ministers')


@api_view(['GET'])
def minister_search(request):
    """Name lookup for pickers: ?q= of at least two characters, at most 20 hits."""
    ministers = find_ministers_by_name(Minister.objects.select_related('church'), request.GET.get('q'))
    return success([
        {
            'id': m.pk,
            'first_name': m.first_name,
            'middle_name': m.middle_name,
            'last_name': m.last_name,
            'full_name': m.full_name,
            'image_url': m.image_url,
            'date_of_birth': m.date_of_birth.isoformat() if m.date_of_birth else None,
            'church_name': m.church.name if m.church_id else None,
            'email': m.email,
            'telephone': m.telephone,
            'gender': m.gender,
            'civil_status': m.civil_status,
        }
        for m in ministers
    ])


# ════════════════════════════════════════════════════════════
# MINISTRY RANKS
# ════════════════════════════════════════════════════════════
def _rank_dict(rank):
    data = reference_to_dict(rank, RANK_FIELDS)
    total = getattr(rank, 'minister_total', None)
    data['minister_count'] = total if total is not None else rank.get_minister_count()
    return data


@api_view(['GET', 'POST'])
def rank_collection(request):
    if request.method == 'POST':
        rank = save_reference(MinistryRankForm(data=read_json(request)), 'ministry rank')
        return success(_rank_dict(rank), 'Ministry rank created successfully', status=201)

    query = parse_list_query(request.GET, REFERENCE_SORT_FIELDS)
    ranks = search_references(MinistryRank.objects.all(), query.search).annotate(
        minister_total=Count('experiences__minister', distinct=True)
    )
    items, pagination = paginate(apply_sort(ranks, query), query)
    return list_response([_rank_dict(r) for r in items], pagination, query)


@api_view(['GET', 'PUT', 'DELETE'])
def rank_detail(request, rank_id):
    pk = parse_id(rank_id, 'ministry rank')
    rank = get_or_404(MinistryRank.objects.all(), pk, 'ministry rank')

    if request.method == 'PUT':
        data = {**reference_to_dict(rank, RANK_FIELDS), **read_json(request)}
        rank = save_reference(MinistryRankForm(data=data, instance=rank), 'ministry rank')
        return success(_rank_dict(rank), 'Ministry rank updated successfully')

    if request.method == 'DELETE':
        delete_reference(rank, 'ministry rank')
        return success(message='Ministry rank deleted successfully')

    return success(_rank_dict(rank))


@api_view(['GET'])
def rank_export(request):
    wb = build_workbook('Ministry Ranks', RANK_HEADERS, rank_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'ministry_ranks')


# ════════════════════════════════════════════════════════════
# MINISTRY SKILLS
# ════════════════════════════════════════════════════════════
def _skill_dict(skill):
    data = reference_to_dict(skill, SKILL_FIELDS)
    total = getattr(skill, 'minister_total', None)
    data['minister_count'] = total if total is not None else skill.get_minister_count()
    return data


@api_view(['GET', 'POST'])
def skill_collection(request):
    if request.method == 'POST':
        skill = save_reference(MinistrySkillForm(data=read_json(request)), 'ministry skill')
        return success(_skill_dict(skill), 'Ministry skill created successfully', status=201)

    query = parse_list_query(request.GET, REFERENCE_SORT_FIELDS)
    skills = search_references(MinistrySkill.objects.all(), query.search).annotate(
        minister_total=Count('assignments__minister', distinct=True)
    )
    items, pagination = paginate(apply_sort(skills, query), query)
    return list_response([_skill_dict(s) for s in items], pagination, query)


@api_view(['GET', 'PUT', 'DELETE'])
def skill_detail(request, skill_id):
    pk = parse_id(skill_id, 'ministry skill')
    skill = get_or_404(MinistrySkill.objects.all(), pk, 'ministry skill')

    if request.method == 'PUT':
        data = {**reference_to_dict(skill, SKILL_FIELDS), **read_json(request)}
        skill = save_reference(MinistrySkillForm(data=data, instance=skill), 'ministry skill')
        return success(_skill_dict(skill), 'Ministry skill updated successfully')

    if request.method == 'DELETE':
        delete_reference(skill, 'ministry skill')
        return success(message='Ministry skill deleted successfully')

    return success(_skill_dict(skill))


@api_view(['GET'])
def skill_export(request):
    wb = build_workbook('Ministry Skills', SKILL_HEADERS, skill_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'ministry_skills')


# ════════════════════════════════════════════════════════════
# CHURCHES
# ════════════════════════════════════════════════════════════
def _church_dict(church):
    data = reference_to_dict(church, CHURCH_FIELDS)
    total = getattr(church, 'minister_total', None)
    data['minister_count'] = total if total is not None else church.get_minister_count()
    return data


@api_view(['GET'])
def church_list(request):
    query = parse_list_query(request.GET, REFERENCE_SORT_FIELDS, default_sort='name', default_order='asc')
    churches = search_references(Church.objects.all(), query.search, ('name', 'address', 'email')).annotate(
        minister_total=Count('ministers', distinct=True)
    )
    items, pagination = paginate(apply_sort(churches, query), query)
    return list_response([_church_dict(c) for c in items], pagination, query)


@api_view(['GET'])
def church_detail(request, church_id):
    pk = parse_id(church_id, 'church')
    return success(_church_dict(get_or_404(Church.objects.all(), pk, 'church')))


@api_view(['GET'])
def church_export(request):
    wb = build_workbook('Churches', CHURCH_HEADERS, church_rows(request.GET.get('search', '').strip()))
    return workbook_response(wb, 'churches')


@api_view(['GET'])
def church_ministers(request, church_id):
    """Ministers designated to one church, paginated like /minister."""
    pk = parse_id(church_id, 'church')
    church = get_or_404(Church.objects.all(), pk, 'church')

    query = parse_list_query(request.GET, CHURCH_MINISTER_SORT_FIELDS)
    ministers = search_references(
        church.ministers.select_related('church'), query.search, CHURCH_MINISTER_SEARCH_FIELDS
    )
    items, pagination = paginate(apply_sort(ministers, query), query)
    return list_response([minister_to_dict(m, include_lists=False) for m in items], pagination, query)


@api_view(['GET'])
def church_ministers_export(request, church_id):
    pk = parse_id(church_id, 'church')
    church = get_or_404(Church.objects.all(), pk, 'church')
    wb, basename = church_minister_workbook(church, request.GET.get('search', '').strip())
    return workbook_response(wb, basename)
