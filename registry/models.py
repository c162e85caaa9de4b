import uuid
from django.db import models
from django.db.models import Q
from django.urls import reverse
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.conf import settings


class StudyLevel(models.TextChoices):
    BACHELOR = 'BACHELOR', 'Bachelor'
    MASTER = 'MASTER', 'Master'
    DOCTORATE = 'DOCTORATE', 'Doctorate'


class StudyProgram(models.TextChoices):
    BACHELOR_S1 = 'BACHELOR_S1', 'Semester 1'
    BACHELOR_S2 = 'BACHELOR_S2', 'Semester 2'
    BACHELOR_S3 = 'BACHELOR_S3', 'Semester 3'
    BACHELOR_S4 = 'BACHELOR_S4', 'Semester 4'
    BACHELOR_S5 = 'BACHELOR_S5', 'Semester 5'
    BACHELOR_S6 = 'BACHELOR_S6', 'Semester 6'
    MASTER_M1 = 'MASTER_M1', 'Master 1'
    MASTER_M2 = 'MASTER_M2', 'Master 2'
    DOCTORATE_Y1 = 'DOCTORATE_Y1', 'Year 1'
    DOCTORATE_Y2 = 'DOCTORATE_Y2', 'Year 2'
    DOCTORATE_Y3 = 'DOCTORATE_Y3', 'Year 3'
    DOCTORATE_Y4 = 'DOCTORATE_Y4', 'Year 4'


class Event(models.Model):
    class Status(models.TextChoices):
        UPCOMING = 'UPCOMING', 'Upcoming'
        ONGOING = 'ONGOING', 'Ongoing'
        COMPLETED = 'COMPLETED', 'Completed'
        CANCELLED = 'CANCELLED', 'Cancelled'

    title = models.CharField(max_length=200)
    slug = models.SlugField(unique=True, help_text="Used for the URL, e.g., 'tech-summit-2024'")
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255, help_text="Venue or 'Online'")

    start_at = models.DateTimeField()
    end_at = models.DateTimeField()

    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    requires_approval = models.BooleanField(
        default=True,
        help_text="Uncheck this to automatically confirm all registrations."
    )

    # Empty list means no restriction on that axis
    eligible_levels = models.JSONField(default=list, blank=True)
    eligible_programs = models.JSONField(default=list, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.UPCOMING)
    is_published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-start_at']

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        return reverse('registry:event-detail', kwargs={'slug': self.slug})

    @property
    def is_open(self):
        return self.status == self.Status.UPCOMING

    @property
    def has_eligibility_rules(self):
        return bool(self.eligible_levels) or bool(self.eligible_programs)

    def confirmed_count(self):
        return self.registrations.filter(status=Registration.Status.CONFIRMED).count()

    def seats_left(self):
        return max(self.capacity - self.confirmed_count(), 0)

    def clean(self):
        errors = {}

        unknown = set(self.eligible_levels or []) - set(StudyLevel.values)
        if unknown:
            errors['eligible_levels'] = f"Unknown study levels: {', '.join(sorted(unknown))}"
        unknown = set(self.eligible_programs or []) - set(StudyProgram.values)
        if unknown:
            errors['eligible_programs'] = f"Unknown study programs: {', '.join(sorted(unknown))}"

        if self.start_at and self.end_at and self.end_at < self.start_at:
            errors['end_at'] = "The event cannot end before it starts."

        # Seats already handed out cannot be taken back
        if self.pk and self.capacity:
            confirmed = self.confirmed_count()
            if self.capacity < confirmed:
                errors['capacity'] = (
                    f"Capacity cannot be lower than the {confirmed} confirmed registrations."
                )

        if errors:
            raise ValidationError(errors)


class Participant(models.Model):
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True)
    study_level = models.CharField(max_length=20, choices=StudyLevel.choices, blank=True)
    study_program = models.CharField(max_length=20, choices=StudyProgram.choices, blank=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.email})"


class Registration(models.Model):
    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        CONFIRMED = 'CONFIRMED', 'Confirmed'
        REJECTED = 'REJECTED', 'Rejected'
        CANCELLED = 'CANCELLED', 'Cancelled'

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='registrations')
    participant = models.ForeignKey(Participant, on_delete=models.CASCADE, related_name='registrations')

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    decided_at = models.DateTimeField(null=True, blank=True)
    decided_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='+'
    )
    decision_comment = models.TextField(blank=True)

    # Credential token, assigned when the registration is confirmed
    token = models.CharField(max_length=64, blank=True, db_index=True)

    checked_in_at = models.DateTimeField(null=True, blank=True)
    checked_in_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='+'
    )

    class Meta:
        ordering = ['-created_at']
        constraints = [
            # One registration per participant per event
            models.UniqueConstraint(fields=['event', 'participant'], name='unique_event_participant'),
            models.UniqueConstraint(
                fields=['token'], condition=~Q(token=''), name='unique_credential_token'
            ),
            models.CheckConstraint(
                condition=Q(checked_in_at__isnull=True) | Q(status='CONFIRMED'),
                name='check_in_requires_confirmation',
            ),
        ]

    def __str__(self):
        return f"{self.participant.name} - {self.event.title} ({self.status})"

    def get_absolute_url(self):
        return reverse('registry:registration-detail', kwargs={'uuid': self.uuid})

    @property
    def is_confirmed(self):
        return self.status == self.Status.CONFIRMED

    @property
    def is_checked_in(self):
        return self.checked_in_at is not None
