import logging
from collections import namedtuple

from django.db import transaction
from django.utils import timezone

from .exceptions import NotConfirmed, TokenEventMismatch, TokenNotFound
from .models import Registration

logger = logging.getLogger(__name__)

CheckInResult = namedtuple('CheckInResult', ['registration', 'first_check_in'])


def check_in(event_id, scanned_token, actor=None):
    """
    Marks the registration behind ``scanned_token`` as attended at ``event_id``.

    Scanning the same ticket again is not an error: the registration comes
    back with ``first_check_in=False`` and its check-in time untouched.
    """
    token = (scanned_token or '').strip()

    with transaction.atomic():
        registration = (
            Registration.objects.select_for_update()
            .select_related('event', 'participant')
            .filter(token=token).first()
        ) if token else None

        # 1. Validation: Known ticket?
        if registration is None:
            logger.warning("Check-in at event %s rejected: unknown token", event_id)
            raise TokenNotFound()

        # 2. Validation: Right event?
        if str(registration.event_id) != str(event_id):
            logger.warning(
                "Check-in at event %s rejected: registration %s belongs to event %s",
                event_id, registration.pk, registration.event_id,
            )
            raise TokenEventMismatch()

        # 3. Validation: Confirmed?
        if registration.status != Registration.Status.CONFIRMED:
            raise NotConfirmed(
                f"Registration status: {registration.get_status_display().upper()}. Not allowed to enter."
            )

        # 4. Only the scan that flips checked_in_at counts as the first one
        now = timezone.now()
        updated = Registration.objects.filter(
            pk=registration.pk,
            status=Registration.Status.CONFIRMED,
            checked_in_at__isnull=True,
        ).update(checked_in_at=now, checked_in_by=actor)

        if updated:
            registration.checked_in_at = now
            registration.checked_in_by = actor
        else:
            registration.refresh_from_db(fields=['checked_in_at', 'checked_in_by'])

    if updated:
        logger.info("Registration %s checked in at event %s", registration.pk, event_id)
    else:
        logger.info("Registration %s scanned again at event %s", registration.pk, event_id)
    return CheckInResult(registration, bool(updated))
