"""
ministry/services.py

Record operations shared by the HTML views, the JSON API and the
in-process gateway: create/update/delete with typed errors, plus the
search → sort → paginate pipeline behind every table.
"""
from collections import namedtuple
from django.db import IntegrityError
from django.db.models import ProtectedError, Q
from .serializers import MinisterPayload
import logging
import math

logger = logging.getLogger(__name__)


MINISTER_SEARCH_FIELDS = (
    "first_name", "last_name", "middle_name",
    "email", "address", "present_address", "telephone",
)
MINISTER_SORT_FIELDS = (
    "created_at", "updated_at", "first_name", "last_name",
    "date_of_birth", "civil_status", "gender",
)
REFERENCE_SORT_FIELDS = ("created_at", "updated_at", "name")
CHURCH_MINISTER_SORT_FIELDS = ("created_at", "updated_at", "first_name", "last_name", "email")
CHURCH_MINISTER_SEARCH_FIELDS = ("first_name", "last_name", "email")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
NAME_SEARCH_MIN_LENGTH = 2
NAME_SEARCH_LIMIT = 20


# ════════════════════════════════════════════════════════════
# ERRORS
# ════════════════════════════════════════════════════════════

class ServiceError(Exception):
    """Base error; `status` is the HTTP status the API answers with."""

    status = 400

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidPayload(ServiceError):
    status = 400


class NotFound(ServiceError):
    status = 404


class Conflict(ServiceError):
    status = 409


def form_errors(form):
    return [
        {"field": field, "message": message}
        for field, messages in form.errors.items()
        for message in messages
    ]


# ════════════════════════════════════════════════════════════
# LIST QUERIES
# ════════════════════════════════════════════════════════════

ListQuery = namedtuple("ListQuery", ["page", "limit", "search", "sort_by", "sort_order"])


def _positive_int(params, name, default, errors, maximum=None):
    raw = params.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        errors.append({"field": name, "message": "Expected a whole number."})
        return default
    if value < 1:
        errors.append({"field": name, "message": "Must be at least 1."})
    elif maximum and value > maximum:
        errors.append({"field": name, "message": f"Must be at most {maximum}."})
    return value


def parse_list_query(params, sortable, default_sort="created_at", default_order="desc"):
    """
    Read page/limit/search/sortBy/sortOrder from query parameters.

    Raises InvalidPayload when a parameter is out of range.
    """
    errors = []
    page = _positive_int(params, "page", 1, errors)
    limit = _positive_int(params, "limit", DEFAULT_LIMIT, errors, maximum=MAX_LIMIT)
    search = (params.get("search") or "").strip()

    sort_by = params.get("sortBy") or params.get("sort_by") or default_sort
    if sort_by not in sortable:
        errors.append({"field": "sortBy", "message": f"Must be one of: {', '.join(sortable)}."})

    sort_order = (params.get("sortOrder") or params.get("sort_order") or default_order).lower()
    if sort_order not in ("asc", "desc"):
        errors.append({"field": "sortOrder", "message": "Must be 'asc' or 'desc'."})

    if errors:
        raise InvalidPayload("Invalid query parameters", details=errors)

    return ListQuery(page, limit, search, sort_by, sort_order)


def search_ministers(queryset, term):
    """Every word of `term` must match at least one searchable column."""
    for word in term.split():
        condition = Q()
        for field in MINISTER_SEARCH_FIELDS:
            condition |= Q(**{f"{field}__icontains": word})
        queryset = queryset.filter(condition)
    return queryset


def search_references(queryset, term, fields=("name", "description")):
    if not term:
        return queryset
    condition = Q()
    for field in fields:
        condition |= Q(**{f"{field}__icontains": term})
    return queryset.filter(condition)


def find_ministers_by_name(queryset, term, limit=NAME_SEARCH_LIMIT):
    """
    Quick lookup by name for pickers: every word must hit a first, middle
    or last name. Raises InvalidPayload for terms shorter than two characters.
    """
    term = (term or "").strip()
    if len(term) < NAME_SEARCH_MIN_LENGTH:
        raise InvalidPayload(f"Query must be at least {NAME_SEARCH_MIN_LENGTH} characters long")
    for word in term.split():
        queryset = queryset.filter(
            Q(first_name__icontains=word) | Q(middle_name__icontains=word) | Q(last_name__icontains=word)
        )
    return list(queryset.order_by("first_name", "last_name", "pk")[:limit])


def apply_sort(queryset, query):
    prefix = "-" if query.sort_order == "desc" else ""
    return queryset.order_by(f"{prefix}{query.sort_by}", f"{prefix}id")


def paginate(queryset, query):
    """Slice one page and build the pagination block that goes with it."""
    total = queryset.count()
    offset = (query.page - 1) * query.limit
    items = list(queryset[offset:offset + query.limit])
    total_pages = math.ceil(total / query.limit) if total else 0
    return items, {
        "page": query.page,
        "limit": query.limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": query.page < total_pages,
        "hasPrev": query.page > 1,
    }


# ════════════════════════════════════════════════════════════
# MINISTERS
# ════════════════════════════════════════════════════════════

def create_minister(data):
    payload = MinisterPayload(data)
    if not payload.is_valid():
        raise InvalidPayload("Validation failed", details=payload.errors)
    return payload.save()


def update_minister(minister, data):
    """Merge `data` over the stored record; lists present in `data` are replaced."""
    payload = MinisterPayload(data, instance=minister)
    if not payload.is_valid():
        raise InvalidPayload("Validation failed", details=payload.errors)
    minister = payload.save()
    logger.info(f"Minister updated: {minister.full_name} (#{minister.pk})")
    return minister


def delete_minister(minister):
    # Sub-records cascade; the post_delete signal logs the removal
    minister.delete()


# ════════════════════════════════════════════════════════════
# RANKS / SKILLS / CHURCHES
# ════════════════════════════════════════════════════════════

def save_reference(form, label):
    """
    Save a rank/skill/church form.

    A duplicate name is a Conflict; anything else invalid is an InvalidPayload.
    """
    if not form.is_valid():
        if form.has_error("name", code="unique"):
            raise Conflict(f"A {label} with this name already exists")
        raise InvalidPayload("Validation failed", details=form_errors(form))
    try:
        obj = form.save()
    except IntegrityError as exc:
        # Lost a race with another writer on the unique name
        if "unique" in str(exc).lower():
            raise Conflict(f"A {label} with this name already exists") from exc
        raise
    logger.info(f"{label.capitalize()} saved: {obj} (#{obj.pk})")
    return obj


def delete_reference(obj, label):
    """Delete a rank/skill/church unless a minister record still points at it."""
    try:
        obj.delete()
    except ProtectedError as exc:
        raise Conflict(f"Cannot delete: this {label} is being used by minister records") from exc
    logger.info(f"{label.capitalize()} deleted: {obj}")
