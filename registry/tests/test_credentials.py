import unittest

from django.test import TestCase

from registry import credentials, services
from registry.exceptions import InvalidTransition, NotConfirmed
from registry.models import Registration
from registry.tests.factories import make_event, make_participant

try:
    import weasyprint
except (ImportError, OSError):
    weasyprint = None


class IssueOrGetTestCase(TestCase):

    def setUp(self):
        self.event = make_event()
        self.registration = services.register(self.event, make_participant())

    def test_repeated_calls_return_the_same_token(self):
        first = credentials.issue_or_get(self.registration.pk)
        second = credentials.issue_or_get(self.registration.pk)

        self.assertEqual(first, second)
        self.assertEqual(first, self.registration.token)

    def test_pending_registration_has_no_credential(self):
        event = make_event(requires_approval=True)
        registration = services.register(event, make_participant())

        with self.assertRaises(NotConfirmed):
            credentials.issue_or_get(registration.pk)

    def test_unknown_registration(self):
        with self.assertRaises(InvalidTransition):
            credentials.issue_or_get(424242)

    def test_token_is_not_an_identifier(self):
        token = credentials.issue_or_get(self.registration.pk)

        self.assertNotEqual(token, str(self.registration.pk))
        self.assertNotIn(str(self.registration.uuid), token)
        self.assertNotIn(self.registration.uuid.hex, token)

    def test_tokens_differ_between_registrations(self):
        other = services.register(self.event, make_participant())
        self.assertNotEqual(
            credentials.issue_or_get(self.registration.pk),
            credentials.issue_or_get(other.pk),
        )

    def test_missing_token_is_derived_and_stored(self):
        Registration.objects.filter(pk=self.registration.pk).update(token='')

        token = credentials.issue_or_get(self.registration.pk)

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.token, token)
        self.assertEqual(token, credentials.derive_token(self.registration))

    def test_token_depends_on_the_secret(self):
        with self.settings(REGISTRY_CREDENTIAL_SECRET='another-secret'):
            rotated = credentials.derive_token(self.registration)
        self.assertNotEqual(rotated, credentials.derive_token(self.registration))


class RenderTestCase(TestCase):

    def setUp(self):
        self.event = make_event(title="AI Summit", location="Faculty of Science")
        self.participant = make_participant(name="Ada Lovelace")
        self.registration = services.register(self.event, self.participant)
        self.token = self.registration.token

    def test_qr_payload_is_the_token(self):
        qr = credentials.build_qr(self.token)
        self.assertEqual([d.data for d in qr.data_list], [self.token.encode()])

    def test_qr_png(self):
        png = credentials.qr_png(self.token)
        self.assertTrue(png.startswith(b'\x89PNG'))

    def test_badge_layout(self):
        html = credentials.badge_html(self.token, self.event, self.participant)

        self.assertIn("AI Summit", html)
        self.assertIn("Faculty of Science", html)
        self.assertIn("Ada Lovelace", html)
        self.assertIn(self.token, html)
        self.assertIn("organizers@example.com", html)
        self.assertIn('src="data:image/png;base64,', html)
        self.assertNotIn('src="http', html)
        self.assertNotIn('href="http', html)

    def test_badge_is_deterministic(self):
        self.assertEqual(
            credentials.badge_html(self.token, self.event, self.participant),
            credentials.badge_html(self.token, self.event, self.participant),
        )

    def test_unconfirmed_registration_is_not_rendered(self):
        event = make_event(requires_approval=True)
        registration = services.register(event, make_participant())

        with self.assertRaises(NotConfirmed):
            credentials.render_registration_badge(registration)

    @unittest.skipIf(weasyprint is None, "WeasyPrint system libraries are not available")
    def test_render_pdf(self):
        pdf = credentials.render_registration_badge(self.registration)
        self.assertTrue(pdf.startswith(b'%PDF'))

    @unittest.skipIf(weasyprint is None, "WeasyPrint system libraries are not available")
    def test_badge_fits_on_one_page(self):
        document = credentials.badge_document(self.token, self.event, self.participant)
        self.assertEqual(len(document.pages), 1)

    @unittest.skipIf(weasyprint is None, "WeasyPrint system libraries are not available")
    def test_rendering_does_not_touch_the_registration(self):
        Registration.objects.filter(pk=self.registration.pk).update(token='')
        self.registration.refresh_from_db()

        credentials.render_registration_badge(self.registration)

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.token, '')
        self.assertIsNone(self.registration.checked_in_at)
