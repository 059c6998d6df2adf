"""
MinisterWizard navigation, submission and session round-trip.

Run with:
    python manage.py test ministry.tests.test_wizard -v 2
"""
from django.test import SimpleTestCase, TestCase
from ministry.gateway import GatewayError
from ministry.wizard import STEPS, FormStep, MinisterWizard, StepIndicator
from .helpers import make_minister


class FakeGateway:
    """Records calls; fails with `error` when one is given."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def create(self, draft):
        self.calls.append(("create", None, draft))
        if self.error:
            raise self.error
        return {"id": 1, **draft}

    def update(self, minister_id, draft):
        self.calls.append(("update", minister_id, draft))
        if self.error:
            raise self.error
        return {"id": minister_id, **draft}


def wizard_at(step, **kwargs):
    return MinisterWizard(current_step=step, **kwargs)


class NavigationTest(SimpleTestCase):

    def test_starts_on_personal_information(self):
        wizard = MinisterWizard()
        self.assertEqual(wizard.current_step, FormStep.PERSONAL_INFORMATION)
        self.assertFalse(wizard.is_edit)

    def test_next_moves_forward_one_step(self):
        for index, step in enumerate(STEPS[:-1]):
            wizard = wizard_at(step)
            wizard.on_next()
            self.assertEqual(wizard.current_step, STEPS[index + 1])

    def test_back_moves_backward_one_step(self):
        for index, step in enumerate(STEPS[1:], start=1):
            wizard = wizard_at(step)
            wizard.on_back()
            self.assertEqual(wizard.current_step, STEPS[index - 1])

    def test_next_on_overview_stays(self):
        wizard = wizard_at(FormStep.OVERVIEW)
        wizard.on_next()
        self.assertEqual(wizard.current_step, FormStep.OVERVIEW)

    def test_back_on_first_step_closes(self):
        closed = []
        wizard = MinisterWizard(on_close=lambda: closed.append(True))
        wizard.on_back()
        self.assertEqual(closed, [True])
        self.assertEqual(wizard.current_step, FormStep.PERSONAL_INFORMATION)

    def test_update_field_replaces_value(self):
        wizard = MinisterWizard()
        children = [{"name": "Ben"}]
        wizard.update_field("children", children)
        children.append({"name": "Cara"})
        self.assertEqual(wizard.draft["children"], [{"name": "Ben"}])

    def test_update_field_rejects_unknown_fields(self):
        with self.assertRaises(KeyError):
            MinisterWizard().update_field("password", "x")


class SubmitTest(SimpleTestCase):

    def test_create_calls_gateway_once(self):
        gateway = FakeGateway()
        wizard = wizard_at(FormStep.OVERVIEW, gateway=gateway)
        self.assertTrue(wizard.handle_submit())
        self.assertEqual([c[0] for c in gateway.calls], ["create"])
        self.assertTrue(wizard.show_success)
        self.assertIsNone(wizard.submission_error)

    def test_edit_calls_update_once_and_on_success(self):
        gateway = FakeGateway()
        results = []
        wizard = wizard_at(FormStep.OVERVIEW, minister_id=7, gateway=gateway, on_success=results.append)
        self.assertTrue(wizard.handle_submit())
        self.assertEqual([(c[0], c[1]) for c in gateway.calls], [("update", 7)])
        self.assertEqual(results[0]["id"], 7)
        self.assertFalse(wizard.show_success)

    def test_failure_keeps_step_and_sets_error(self):
        gateway = FakeGateway(GatewayError("Validation failed", status=400))
        wizard = wizard_at(FormStep.OVERVIEW, gateway=gateway)
        self.assertFalse(wizard.handle_submit())
        self.assertEqual(wizard.current_step, FormStep.OVERVIEW)
        self.assertEqual(wizard.submission_error, "Validation failed")
        self.assertFalse(wizard.is_submitting)

    def test_failure_names_first_invalid_field(self):
        error = GatewayError("Validation failed", status=400, details=[
            {"field": "first_name", "message": "This field is required."},
            {"field": "last_name", "message": "This field is required."},
        ])
        wizard = wizard_at(FormStep.OVERVIEW, gateway=FakeGateway(error))
        wizard.handle_submit()
        self.assertEqual(wizard.submission_error, "Validation failed: First name - This field is required.")

    def test_failure_without_message_uses_default(self):
        wizard = wizard_at(FormStep.OVERVIEW, gateway=FakeGateway(GatewayError("")))
        wizard.handle_submit()
        self.assertTrue(wizard.submission_error)

    def test_retry_after_failure(self):
        gateway = FakeGateway(GatewayError("Server down"))
        wizard = wizard_at(FormStep.OVERVIEW, gateway=gateway)
        wizard.handle_submit()
        gateway.error = None
        self.assertTrue(wizard.handle_submit())
        self.assertIsNone(wizard.submission_error)
        self.assertEqual(len(gateway.calls), 2)

    def test_submit_outside_overview_is_refused(self):
        gateway = FakeGateway()
        wizard = wizard_at(FormStep.CERTIFICATION_SIGNATURES, gateway=gateway)
        with self.assertRaises(ValueError):
            wizard.handle_submit()
        self.assertEqual(gateway.calls, [])


class IndicatorTest(SimpleTestCase):

    def test_progress_numbers(self):
        indicator = StepIndicator(FormStep.EDUCATION_EMPLOYMENT)
        self.assertEqual((indicator.position, indicator.total, indicator.percent), (5, 10, 50))

    def test_item_states(self):
        states = [item["state"] for item in StepIndicator(FormStep.CONTACT_GOVERNMENT_INFO).items]
        self.assertEqual(states[:3], ["complete", "current", "upcoming"])
        self.assertEqual(states.count("upcoming"), 8)


class SessionTest(TestCase):

    def test_session_round_trip(self):
        wizard = wizard_at(FormStep.SEMINARS_CONFERENCES, minister_id=3)
        wizard.update_field("nickname", "Jun")
        wizard.submission_error = "Try again"

        restored = MinisterWizard.from_session(wizard.to_session())
        self.assertEqual(restored.current_step, FormStep.SEMINARS_CONFERENCES)
        self.assertEqual(restored.minister_id, 3)
        self.assertEqual(restored.draft["nickname"], "Jun")
        self.assertEqual(restored.submission_error, "Try again")

    def test_for_minister_hydrates_draft(self):
        minister = make_minister(nickname="Jun")
        wizard = MinisterWizard.for_minister(minister)
        self.assertTrue(wizard.is_edit)
        self.assertEqual(wizard.minister_id, minister.pk)
        self.assertEqual(wizard.draft["nickname"], "Jun")
        self.assertEqual(wizard.draft["date_of_birth"], "1985-06-15")
        self.assertNotIn("id", wizard.draft)
