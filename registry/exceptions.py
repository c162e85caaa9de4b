"""
Rejections raised by the registration and credential services.

Views translate them into responses using ``code`` and ``status_code``;
the message is safe to show to participants and check-in staff.
"""


class RegistrationError(Exception):
    code = 'registration_error'
    status_code = 400
    default_message = "The request could not be completed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyRegistered(RegistrationError):
    code = 'already_registered'
    status_code = 409
    default_message = "You have already registered for this event."


class CapacityExceeded(RegistrationError):
    code = 'capacity_exceeded'
    status_code = 409
    default_message = "This event is full."


class NotEligible(RegistrationError):
    code = 'not_eligible'
    status_code = 403

    def __init__(self, reason):
        self.reason = reason
        super().__init__(reason)


class EventNotOpen(RegistrationError):
    code = 'event_not_open'
    status_code = 409
    default_message = "This event is not open for registration."


class InvalidTransition(RegistrationError):
    code = 'invalid_transition'
    status_code = 409
    default_message = "This registration cannot be changed any more."


class NotConfirmed(RegistrationError):
    code = 'not_confirmed'
    status_code = 409
    default_message = "This registration has not been confirmed yet."


class TokenNotFound(RegistrationError):
    code = 'token_not_found'
    status_code = 404
    default_message = "Unknown ticket."


class TokenEventMismatch(RegistrationError):
    code = 'token_event_mismatch'
    status_code = 409
    default_message = "This ticket belongs to a different event."
