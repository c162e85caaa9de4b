"""
Credential tokens and the printable badge built around them.

The token is an HMAC of the registration's uuid under
``REGISTRY_CREDENTIAL_SECRET``. It is stored on the registration when it is
confirmed so check-in can resolve it with a single lookup, and recomputing it
always yields the stored value.
"""
import base64
import logging
from io import BytesIO

import qrcode
from django.conf import settings
from django.template.loader import render_to_string
from django.utils.crypto import salted_hmac

from .exceptions import InvalidTransition, NotConfirmed
from .models import Registration

logger = logging.getLogger(__name__)

TOKEN_SALT = 'registry.credentials.token'
TOKEN_LENGTH = 40


def derive_token(registration):
    secret = getattr(settings, 'REGISTRY_CREDENTIAL_SECRET', None) or settings.SECRET_KEY
    digest = salted_hmac(TOKEN_SALT, str(registration.uuid), secret=secret, algorithm='sha256')
    return digest.hexdigest()[:TOKEN_LENGTH]


def credential_for(registration):
    """
    Token for a confirmed registration, without touching the database.
    """
    if registration.status != Registration.Status.CONFIRMED:
        raise NotConfirmed()
    return registration.token or derive_token(registration)


def issue_or_get(registration_id):
    """
    Returns the credential token of a confirmed registration.

    Calling it again returns the same token. A confirmed registration that has
    no stored token yet gets one written with a conditional update.
    """
    registration = Registration.objects.filter(pk=registration_id).first()
    if registration is None:
        raise InvalidTransition("Registration not found.")

    token = credential_for(registration)
    if not registration.token:
        Registration.objects.filter(
            pk=registration.pk, status=Registration.Status.CONFIRMED, token=''
        ).update(token=token)
        logger.info("Issued credential for registration %s", registration.pk)
    return token


# --- Rendering ---

def build_qr(token):
    # The payload is the bare token, nothing else
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(token)
    qr.make(fit=True)
    return qr


def qr_png(token):
    img = build_qr(token).make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, 'PNG')
    return buffer.getvalue()


def qr_data_uri(token):
    encoded = base64.b64encode(qr_png(token)).decode('ascii')
    return f"data:image/png;base64,{encoded}"


def badge_html(token, event, participant):
    organizer = getattr(settings, 'REGISTRY_ORGANIZER', {})
    return render_to_string('registry/badge_pdf.html', {
        'event': event,
        'holder_name': participant.name or participant.email,
        'token': token,
        'qr_image': qr_data_uri(token),
        'organizer': organizer,
    })


def badge_document(token, event, participant):
    """
    Laid-out WeasyPrint document for ``participant`` at ``event``.

    Everything the page needs, the QR image included, is inlined in the HTML,
    so WeasyPrint never fetches anything.
    """
    from weasyprint import HTML

    return HTML(string=badge_html(token, event, participant)).render()


def render_badge(token, event, participant):
    """One-page PDF badge."""
    return badge_document(token, event, participant).write_pdf()


def render_registration_badge(registration):
    token = credential_for(registration)
    return render_badge(token, registration.event, registration.participant)
