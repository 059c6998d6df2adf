"""
ministry/maps.py

Location picking for church addresses.

PlacesClient wraps the Google Places / Geocoding web services; MapPicker
holds the state of one open picker (staged location, marker, suggestions)
between HTMX requests. Nothing is written back to the form until confirm().

Search input is debounced in the browser (SEARCH_DEBOUNCE_MS). In-flight
searches are not cancelled, so a slow response can replace the suggestions
of a newer query.
"""
from collections import namedtuple
from django.conf import settings
import logging
import requests

logger = logging.getLogger(__name__)


LatLng          = namedtuple("LatLng", ["lat", "lng"])
PlaceSuggestion = namedtuple("PlaceSuggestion", ["place_id", "description"])

DEFAULT_CENTER     = LatLng(37.7749, -122.4194)
DEFAULT_ZOOM       = 10
SELECTED_ZOOM      = 15
MAX_SUGGESTIONS    = 5
SEARCH_DEBOUNCE_MS = 300
DETAIL_FIELDS      = "place_id,geometry,name,formatted_address,types"


class PlacesError(Exception):
    """The places provider failed or answered with an error status."""


class PlacesClient:

    AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
    DETAILS_URL      = "https://maps.googleapis.com/maps/api/place/details/json"
    GEOCODE_URL      = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key=None, session=None, timeout=10):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_MAPS_API_KEY
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, url, params):
        if not self.api_key:
            raise PlacesError("Google Maps API key is not configured.")
        try:
            response = self.session.get(url, params={**params, "key": self.api_key}, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as exc:
            raise PlacesError(f"Places request failed: {exc}") from exc
        except ValueError as exc:
            raise PlacesError("Places service returned an invalid response.") from exc

        status = body.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            raise PlacesError(body.get("error_message") or f"Places request failed: {status}")
        return body

    def autocomplete(self, query):
        """At most MAX_SUGGESTIONS predictions for `query`."""
        body = self._get(self.AUTOCOMPLETE_URL, {"input": query})
        return [
            PlaceSuggestion(p["place_id"], p.get("description", ""))
            for p in body.get("predictions", [])[:MAX_SUGGESTIONS]
        ]

    def details(self, place_id):
        """(LatLng, address) for a place id."""
        body = self._get(self.DETAILS_URL, {"place_id": place_id, "fields": DETAIL_FIELDS})
        result = body.get("result") or {}
        location = (result.get("geometry") or {}).get("location")
        if not location:
            raise PlacesError("Place has no location.")
        address = result.get("formatted_address") or result.get("name") or ""
        return LatLng(location["lat"], location["lng"]), address

    def reverse_geocode(self, location):
        body = self._get(self.GEOCODE_URL, {"latlng": f"{location.lat},{location.lng}"})
        results = body.get("results") or []
        return results[0].get("formatted_address", "") if results else ""


class MapPicker:
    """
    One location picker dialog.

    `value` is what the form held when the picker opened; `selected` is
    the staged choice and doubles as the marker position.
    """

    def __init__(self, client=None, on_change=None):
        self._client = client
        self.on_change = on_change
        self.is_open = False
        self.value = None
        self.selected = None
        self.address = ""
        self.query = ""
        self.suggestions = []
        self.center = DEFAULT_CENTER
        self.zoom = DEFAULT_ZOOM
        self.error = None

    @property
    def client(self):
        if self._client is None:
            self._client = PlacesClient()
        return self._client

    @property
    def marker(self):
        return self.selected

    def open(self, value=None, address=""):
        self.value = value
        self.selected = value
        self.address = address if value else ""
        self.center = value or DEFAULT_CENTER
        self.zoom = SELECTED_ZOOM if value else DEFAULT_ZOOM
        self.query = ""
        self.suggestions = []
        self.error = None
        self.is_open = True

    def search(self, query):
        self.query = query
        self.error = None
        if not query.strip():
            self.suggestions = []
            return self.suggestions
        try:
            self.suggestions = self.client.autocomplete(query.strip())[:MAX_SUGGESTIONS]
        except PlacesError as exc:
            logger.warning(f"Place search failed for {query!r}: {exc}")
            self.error = str(exc)
            self.suggestions = []
        return self.suggestions

    def select_place(self, place_id, description=""):
        try:
            location, address = self.client.details(place_id)
        except PlacesError as exc:
            logger.warning(f"Place details failed for {place_id}: {exc}")
            self.error = str(exc)
            return None
        self.selected = location
        self.address = address or description
        self.center = location
        self.zoom = SELECTED_ZOOM
        self.query = description or address
        self.suggestions = []
        self.error = None
        return location

    def pick(self, location):
        """Map click: stage the point, then look up its address."""
        self.selected = location
        self.center = location
        self.address = ""
        self.error = None
        try:
            self.address = self.client.reverse_geocode(location)
        except PlacesError as exc:
            logger.warning(f"Reverse geocoding failed for {location}: {exc}")
            self.error = str(exc)
        return location

    def clear(self):
        self.selected = None
        self.address = ""
        self.query = ""
        self.suggestions = []

    def confirm(self):
        """Emit the staged location (possibly None) and close."""
        chosen = self.selected
        if self.on_change:
            self.on_change(chosen)
        self.is_open = False
        return chosen

    def cancel(self):
        """Drop staged changes and close."""
        self.selected = self.value
        self.address = ""
        self.suggestions = []
        self.is_open = False

    # ── Session ──

    def to_session(self):
        return {
            "value": list(self.value) if self.value else None,
            "selected": list(self.selected) if self.selected else None,
            "address": self.address,
            "query": self.query,
            "suggestions": [list(s) for s in self.suggestions],
            "center": list(self.center),
            "zoom": self.zoom,
            "is_open": self.is_open,
        }

    @classmethod
    def from_session(cls, state, **collaborators):
        picker = cls(**collaborators)
        picker.value = LatLng(*state["value"]) if state.get("value") else None
        picker.selected = LatLng(*state["selected"]) if state.get("selected") else None
        picker.address = state.get("address", "")
        picker.query = state.get("query", "")
        picker.suggestions = [PlaceSuggestion(*s) for s in state.get("suggestions", [])]
        picker.center = LatLng(*state["center"]) if state.get("center") else DEFAULT_CENTER
        picker.zoom = state.get("zoom", DEFAULT_ZOOM)
        picker.is_open = state.get("is_open", False)
        return picker
