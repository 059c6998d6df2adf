# ministry/views_maps.py
"""
HTMX endpoints behind the church location picker.

The open picker lives in the session; the church form only changes when
the user confirms (the result partial swaps the latitude, longitude and
address inputs out-of-band).
"""

from decimal import Decimal, InvalidOperation
from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse
from django.shortcuts import render
from .maps import DEFAULT_ZOOM, SEARCH_DEBOUNCE_MS, LatLng, MapPicker


SESSION_KEY = 'map_picker'

ACTIONS = ('open', 'search', 'select', 'pick', 'clear', 'confirm', 'cancel')


def _latlng(lat, lng):
    """LatLng from two strings, or None when either is blank/invalid/out of range."""
    try:
        lat, lng = Decimal(lat), Decimal(lng)
    except (TypeError, InvalidOperation):
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return LatLng(float(lat), float(lng))


def _load(request):
    state = request.session.get(SESSION_KEY)
    return MapPicker.from_session(state) if state else MapPicker()


def _save(request, picker):
    request.session[SESSION_KEY] = picker.to_session()


def _render(request, picker, template='ministry/partials/map_picker.html', **extra):
    context = {
        'picker': picker,
        'api_key': settings.GOOGLE_MAPS_API_KEY,
        'debounce_ms': SEARCH_DEBOUNCE_MS,
        'default_zoom': DEFAULT_ZOOM,
        **extra,
    }
    return render(request, template, context)


@login_required
def map_picker(request, action):
    """
    open     GET  latitude/longitude/address of the form being edited
    search   GET  q   (suggestions only)
    select   POST place_id, description
    pick     POST lat, lng   (map click)
    clear    POST
    confirm  POST  writes the staged location into the form and closes
    cancel   POST  closes without touching the form
    """
    if action not in ACTIONS:
        raise Http404('Unknown picker action')

    picker = _load(request)

    if action == 'open':
        value = _latlng(request.GET.get('latitude'), request.GET.get('longitude'))
        picker.open(value, request.GET.get('address', ''))
        _save(request, picker)
        return _render(request, picker)

    if action == 'search':
        picker.search(request.GET.get('q', ''))
        _save(request, picker)
        return _render(request, picker, 'ministry/partials/map_suggestions.html')

    if request.method != 'POST':
        return HttpResponse(status=405)

    if action == 'select':
        picker.select_place(request.POST.get('place_id', ''), request.POST.get('description', ''))
    elif action == 'pick':
        location = _latlng(request.POST.get('lat'), request.POST.get('lng'))
        if location is None:
            picker.error = 'Invalid map position.'
        else:
            picker.pick(location)
    elif action == 'clear':
        picker.clear()
    elif action == 'confirm':
        confirmed = {}
        picker.on_change = lambda location: confirmed.update(location=location)
        picker.confirm()
        request.session.pop(SESSION_KEY, None)
        return _render(
            request, picker, 'ministry/partials/map_picker_result.html',
            location=confirmed.get('location'), address=picker.address,
        )
    elif action == 'cancel':
        picker.cancel()
        request.session.pop(SESSION_KEY, None)
        return HttpResponse('')

    _save(request, picker)
    return _render(request, picker)
