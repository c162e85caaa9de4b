import threading
import unittest

from django.db import connection
from django.test import TransactionTestCase

from registry import services
from registry.checkin import check_in
from registry.exceptions import CapacityExceeded
from registry.models import Registration
from registry.tests.factories import make_event, make_participant, make_staff


def run_together(*calls):
    """
    Runs each call on its own thread, released at the same moment.
    Returns results and exceptions in call order.
    """
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def worker(index, call):
        try:
            barrier.wait()
            outcomes[index] = call()
        except Exception as exc:
            outcomes[index] = exc
        finally:
            connection.close()

    threads = [threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


@unittest.skipUnless(
    connection.features.has_select_for_update and connection.vendor != 'sqlite',
    "Needs a database with row locks (set DATABASE_NAME to a Postgres database)",
)
class ConcurrentOperationsTestCase(TransactionTestCase):

    def test_two_approvals_for_the_last_seat(self):
        staff = make_staff()
        event = make_event(capacity=1, requires_approval=True)
        first = services.register(event, make_participant())
        second = services.register(event, make_participant())

        outcomes = run_together(
            lambda: services.decide(first.pk, services.APPROVE, staff),
            lambda: services.decide(second.pk, services.APPROVE, staff),
        )

        confirmed = Registration.objects.filter(event=event, status=Registration.Status.CONFIRMED)
        self.assertEqual(confirmed.count(), 1)
        self.assertEqual(sum(isinstance(o, Registration) for o in outcomes), 1)
        self.assertEqual(sum(isinstance(o, CapacityExceeded) for o in outcomes), 1)

    def test_two_registrations_for_the_last_seat(self):
        event = make_event(capacity=1, requires_approval=False)
        participants = [make_participant(), make_participant()]

        outcomes = run_together(*[
            (lambda p=p: services.register(event, p)) for p in participants
        ])

        self.assertEqual(event.registrations.count(), 1)
        self.assertEqual(sum(isinstance(o, CapacityExceeded) for o in outcomes), 1)

    def test_same_ticket_scanned_twice_at_once(self):
        event = make_event()
        registration = services.register(event, make_participant())

        outcomes = run_together(
            lambda: check_in(event.pk, registration.token),
            lambda: check_in(event.pk, registration.token),
        )

        self.assertEqual([o.first_check_in for o in outcomes].count(True), 1)
        self.assertEqual(outcomes[0].registration.checked_in_at, outcomes[1].registration.checked_in_at)
        registration.refresh_from_db()
        self.assertEqual(registration.checked_in_at, outcomes[0].registration.checked_in_at)
