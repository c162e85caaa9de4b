from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from registry import services
from registry.models import Registration
from registry.tests.factories import make_event, make_participant


class EventValidationTestCase(TestCase):

    def test_capacity_cannot_drop_below_confirmed(self):
        event = make_event(capacity=3)
        for _ in range(2):
            services.register(event, make_participant())

        event.capacity = 1
        with self.assertRaises(ValidationError) as ctx:
            event.full_clean()
        self.assertIn('capacity', ctx.exception.message_dict)

        event.capacity = 2
        event.full_clean()

    def test_capacity_must_be_positive(self):
        event = make_event()
        event.capacity = 0
        with self.assertRaises(ValidationError):
            event.full_clean()

    def test_unknown_eligibility_values(self):
        event = make_event(eligible_levels=['WIZARD'], eligible_programs=['MASTER_M9'])
        with self.assertRaises(ValidationError) as ctx:
            event.full_clean()
        self.assertIn('eligible_levels', ctx.exception.message_dict)
        self.assertIn('eligible_programs', ctx.exception.message_dict)


class RegistrationConstraintTestCase(TestCase):

    def test_only_confirmed_registrations_carry_a_check_in(self):
        registration = services.register(make_event(requires_approval=True), make_participant())

        with self.assertRaises(IntegrityError):
            Registration.objects.filter(pk=registration.pk).update(checked_in_at=timezone.now())

    def test_one_registration_per_participant(self):
        event = make_event()
        participant = make_participant()
        Registration.objects.create(event=event, participant=participant)

        with self.assertRaises(IntegrityError):
            Registration.objects.create(event=event, participant=participant)
