from datetime import timedelta
from itertools import count

from django.contrib.auth import get_user_model
from django.utils import timezone

from registry.models import Event, Participant

_seq = count(1)


def make_event(**kwargs):
    n = next(_seq)
    start = timezone.now() + timedelta(days=7)
    defaults = {
        'title': f"Event {n}",
        'slug': f"event-{n}",
        'location': "Main Hall",
        'start_at': start,
        'end_at': start + timedelta(hours=3),
        'capacity': 10,
        'requires_approval': False,
        'is_published': True,
    }
    defaults.update(kwargs)
    return Event.objects.create(**defaults)


def make_participant(**kwargs):
    n = next(_seq)
    defaults = {
        'name': f"Participant {n}",
        'email': f"participant{n}@example.com",
    }
    defaults.update(kwargs)
    return Participant.objects.create(**defaults)


def make_staff(username='staff'):
    return get_user_model().objects.create_user(
        username=username, password='secret', is_staff=True,
    )
