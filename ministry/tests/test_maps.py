"""
Location picker state and the Places client.

Run with:
    python manage.py test ministry.tests.test_maps -v 2
"""
from django.test import SimpleTestCase
from unittest.mock import Mock
from ministry.maps import (
    DEFAULT_CENTER, DEFAULT_ZOOM, MAX_SUGGESTIONS, SELECTED_ZOOM,
    LatLng, MapPicker, PlaceSuggestion, PlacesClient, PlacesError,
)
import requests


MANILA = LatLng(14.5995, 120.9842)


class FakePlaces:

    def __init__(self):
        self.queries = []

    def autocomplete(self, query):
        self.queries.append(query)
        return [PlaceSuggestion(f"id-{i}", f"{query} {i}") for i in range(8)]

    def details(self, place_id):
        return MANILA, "Manila, Metro Manila, Philippines"

    def reverse_geocode(self, location):
        return "Somewhere in Cebu"


class MapPickerTest(SimpleTestCase):

    def picker(self, value=None):
        changes = []
        picker = MapPicker(client=FakePlaces(), on_change=changes.append)
        picker.open(value)
        return picker, changes

    def test_open_without_value_uses_default_center(self):
        picker, _ = self.picker()
        self.assertEqual((picker.center, picker.zoom), (DEFAULT_CENTER, DEFAULT_ZOOM))
        self.assertIsNone(picker.marker)

    def test_open_with_value_centers_on_it(self):
        picker, _ = self.picker(MANILA)
        self.assertEqual((picker.center, picker.zoom, picker.marker), (MANILA, SELECTED_ZOOM, MANILA))

    def test_search_limits_suggestions(self):
        picker, _ = self.picker()
        self.assertEqual(len(picker.search("Quiapo")), MAX_SUGGESTIONS)

    def test_blank_search_clears_without_calling_provider(self):
        picker, _ = self.picker()
        picker.search("Quiapo")
        picker.search("   ")
        self.assertEqual(picker.suggestions, [])
        self.assertEqual(picker.client.queries, ["Quiapo"])

    def test_select_place_stages_location(self):
        picker, changes = self.picker()
        picker.select_place("id-1", "Quiapo Church")
        self.assertEqual(picker.marker, MANILA)
        self.assertEqual(picker.address, "Manila, Metro Manila, Philippines")
        self.assertEqual(changes, [])

    def test_pick_reverse_geocodes(self):
        picker, _ = self.picker()
        picker.pick(LatLng(10.3, 123.9))
        self.assertEqual(picker.address, "Somewhere in Cebu")

    def test_clear_emits_none_and_removes_marker(self):
        picker, changes = self.picker(MANILA)
        picker.clear()
        self.assertIsNone(picker.marker)
        self.assertIsNone(picker.confirm())
        self.assertEqual(changes, [None])
        self.assertFalse(picker.is_open)

    def test_confirm_emits_selection(self):
        picker, changes = self.picker()
        picker.select_place("id-1")
        picker.confirm()
        self.assertEqual(changes, [MANILA])

    def test_cancel_reverts_to_value(self):
        picker, changes = self.picker(MANILA)
        picker.pick(LatLng(1, 1))
        picker.cancel()
        self.assertEqual(picker.selected, MANILA)
        self.assertEqual(changes, [])
        self.assertFalse(picker.is_open)

    def test_provider_failure_sets_error(self):
        client = Mock()
        client.autocomplete.side_effect = PlacesError("OVER_QUERY_LIMIT")
        picker = MapPicker(client=client)
        picker.open()
        self.assertEqual(picker.search("Quiapo"), [])
        self.assertEqual(picker.error, "OVER_QUERY_LIMIT")

    def test_session_round_trip(self):
        picker, _ = self.picker(MANILA)
        picker.search("Quiapo")
        restored = MapPicker.from_session(picker.to_session())
        self.assertEqual(restored.value, MANILA)
        self.assertEqual(restored.suggestions, picker.suggestions)
        self.assertTrue(restored.is_open)


class PlacesClientTest(SimpleTestCase):

    def places(self, body=None, error=None):
        session = Mock()
        if error:
            session.get.side_effect = error
        else:
            session.get.return_value.json.return_value = body
        return PlacesClient(api_key="test-key", session=session), session

    def test_autocomplete(self):
        body = {"status": "OK", "predictions": [
            {"place_id": "abc", "description": "Quiapo Church, Manila"},
        ]}
        client, session = self.places(body)
        self.assertEqual(client.autocomplete("Quiapo"), [PlaceSuggestion("abc", "Quiapo Church, Manila")])
        self.assertEqual(session.get.call_args.kwargs["params"], {"input": "Quiapo", "key": "test-key"})

    def test_details(self):
        body = {"status": "OK", "result": {
            "geometry": {"location": {"lat": 14.5995, "lng": 120.9842}},
            "formatted_address": "Manila",
        }}
        client, _ = self.places(body)
        self.assertEqual(client.details("abc"), (MANILA, "Manila"))

    def test_zero_results_is_empty(self):
        client, _ = self.places({"status": "ZERO_RESULTS", "results": []})
        self.assertEqual(client.reverse_geocode(MANILA), "")

    def test_error_status_raises(self):
        client, _ = self.places({"status": "REQUEST_DENIED", "error_message": "API key invalid"})
        with self.assertRaisesMessage(PlacesError, "API key invalid"):
            client.autocomplete("Quiapo")

    def test_network_error_raises(self):
        client, _ = self.places(error=requests.Timeout("slow"))
        with self.assertRaises(PlacesError):
            client.autocomplete("Quiapo")

    def test_missing_key_raises(self):
        client = PlacesClient(api_key="", session=Mock())
        with self.assertRaises(PlacesError):
            client.autocomplete("Quiapo")
