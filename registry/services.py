"""
Registration lifecycle: intake, staff decisions and cancellation.

Every operation runs in a single transaction and locks the event row before
counting seats, so two requests competing for the last seat are serialized
and the loser sees ``CapacityExceeded``. Actors are passed in explicitly;
callers are expected to have authorized them already.
"""
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from . import eligibility
from .credentials import derive_token
from .exceptions import (
    AlreadyRegistered, CapacityExceeded, EventNotOpen,
    InvalidTransition, NotEligible,
)
from .models import Event, Registration

logger = logging.getLogger(__name__)

APPROVE = 'approve'
REJECT = 'reject'
DECISIONS = (APPROVE, REJECT)


def _lock_event(event_id):
    return Event.objects.select_for_update().get(pk=event_id)


def _ensure_seat(event):
    if event.confirmed_count() >= event.capacity:
        raise CapacityExceeded()


def register(event, participant):
    """
    Creates the participant's registration for ``event``.

    Checks, first failure wins: the event is upcoming, a confirmed seat is
    left, the participant passes the eligibility gate, and they are not
    registered yet. The registration starts PENDING when the event requires
    approval and CONFIRMED otherwise.
    """
    with transaction.atomic():
        event = _lock_event(event.pk)

        # 1. Validation: Is the event still open?
        if not event.is_open:
            raise EventNotOpen()

        # 2. Validation: Seats left? Only confirmed registrations hold a seat
        _ensure_seat(event)

        # 3. Validation: Eligible?
        verdict = eligibility.registration_gate(event, participant)
        if not verdict.eligible:
            raise NotEligible(verdict.reason)

        # 4. Validation: Duplicate?
        if Registration.objects.filter(event=event, participant=participant).exists():
            raise AlreadyRegistered()

        if event.requires_approval:
            initial_status = Registration.Status.PENDING
        else:
            initial_status = Registration.Status.CONFIRMED

        registration = Registration(event=event, participant=participant, status=initial_status)
        if initial_status == Registration.Status.CONFIRMED:
            registration.token = derive_token(registration)

        try:
            with transaction.atomic():
                registration.save()
        except IntegrityError:
            raise AlreadyRegistered()

    logger.info(
        "Registration %s created for %s at %s (%s)",
        registration.pk, participant.email, event.slug, registration.status,
    )
    return registration


def decide(registration_id, decision, actor, comment=''):
    """
    Approves or rejects a pending registration.

    Approval re-checks capacity, since seats may have filled while the
    registration was waiting.
    """
    if decision not in DECISIONS:
        raise ValueError(f"Unknown decision: {decision!r}")

    event_id = (
        Registration.objects.filter(pk=registration_id)
        .values_list('event_id', flat=True).first()
    )
    if event_id is None:
        raise InvalidTransition("Registration not found.")

    with transaction.atomic():
        event = _lock_event(event_id)
        registration = (
            Registration.objects.select_for_update()
            .select_related('participant')
            .get(pk=registration_id)
        )
        if registration.status != Registration.Status.PENDING:
            raise InvalidTransition(
                f"Registration is already {registration.get_status_display().lower()}."
            )

        if decision == APPROVE:
            _ensure_seat(event)
            registration.status = Registration.Status.CONFIRMED
            registration.token = derive_token(registration)
        else:
            registration.status = Registration.Status.REJECTED

        registration.decided_at = timezone.now()
        registration.decided_by = actor
        registration.decision_comment = comment or ''
        registration.save(update_fields=[
            'status', 'token', 'decided_at', 'decided_by', 'decision_comment',
        ])

    logger.info(
        "Registration %s %s by %s",
        registration.pk, registration.status.lower(), getattr(actor, 'username', actor),
    )
    return registration


def cancel(registration_id, actor=None):
    """Withdraws a pending or confirmed registration that has not checked in."""
    with transaction.atomic():
        registration = Registration.objects.select_for_update().filter(pk=registration_id).first()
        if registration is None:
            raise InvalidTransition("Registration not found.")

        if registration.status not in (Registration.Status.PENDING, Registration.Status.CONFIRMED):
            raise InvalidTransition()
        if registration.checked_in_at is not None:
            raise InvalidTransition("Checked-in registrations cannot be cancelled.")

        registration.status = Registration.Status.CANCELLED
        registration.save(update_fields=['status'])

    logger.info("Registration %s cancelled by %s", registration.pk, getattr(actor, 'username', 'participant'))
    return registration
