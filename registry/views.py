import csv
import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.views.generic import ListView, DetailView
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.contrib import messages
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from . import checkin, credentials, eligibility, services
from .exceptions import RegistrationError
from .forms import CheckInForm, DecisionForm, RegistrationForm
from .models import Event, Participant, Registration

logger = logging.getLogger(__name__)


def error_json(exc):
    return JsonResponse({'error': exc.code, 'message': exc.message}, status=exc.status_code)


class EventListView(ListView):
    model = Event
    template_name = 'registry/event_list.html'
    context_object_name = 'events'

    def get_queryset(self):
        # Only show published events to the public
        return Event.objects.filter(is_published=True)


class EventDetailView(DetailView):
    model = Event
    template_name = 'registry/event_detail.html'
    context_object_name = 'event'

    def get_queryset(self):
        return Event.objects.filter(is_published=True)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['seats_left'] = self.object.seats_left()
        return context


def event_register(request, slug):
    event = get_object_or_404(Event, slug=slug, is_published=True)

    if request.method == 'POST':
        form = RegistrationForm(request.POST, event=event)
        if form.is_valid():
            participant = form.save_participant()
            try:
                registration = services.register(event, participant)
            except RegistrationError as exc:
                return render(request, 'registry/registration_error.html', {
                    'event': event,
                    'message': exc.message,
                }, status=exc.status_code)

            return render(request, 'registry/registration_success.html', {'registration': registration})
    else:
        form = RegistrationForm(event=event)

    return render(request, 'registry/registration_form.html', {'event': event, 'form': form})


@require_GET
def eligibility_check(request, slug):
    """
    Pre-submission check for the registration form. Runs the same gate as
    the registration service.
    """
    event = get_object_or_404(Event, slug=slug, is_published=True)
    applicant = Participant(
        study_level=request.GET.get('study_level', ''),
        study_program=request.GET.get('study_program', ''),
    )
    verdict = eligibility.registration_gate(event, applicant)
    return JsonResponse({
        'eligible': verdict.eligible,
        'reason': verdict.reason,
        'requires_approval': event.requires_approval,
    })


def registration_detail(request, uuid):
    """
    Public view for a participant to see their ticket status.
    Uses the UUID so no login is required.
    """
    registration = get_object_or_404(Registration.objects.select_related('event', 'participant'), uuid=uuid)
    return render(request, 'registry/registration_detail.html', {'registration': registration})


@require_POST
def cancel_registration(request, uuid):
    registration = get_object_or_404(Registration, uuid=uuid)
    try:
        services.cancel(registration.pk)
    except RegistrationError as exc:
        messages.error(request, exc.message)
    else:
        messages.success(request, "Your registration has been cancelled.")
    return redirect('registry:registration-detail', uuid=uuid)


@require_GET
def registration_credential(request, uuid):
    registration = get_object_or_404(Registration, uuid=uuid)
    try:
        token = credentials.issue_or_get(registration.pk)
    except RegistrationError as exc:
        return error_json(exc)
    return JsonResponse({'registration': str(registration.uuid), 'token': token})


def registration_qr_code(request, uuid):
    """
    Generates a QR code image holding the registration's credential token.
    """
    registration = get_object_or_404(Registration, uuid=uuid)
    try:
        token = credentials.credential_for(registration)
    except RegistrationError as exc:
        return HttpResponse(exc.message, status=exc.status_code)

    return HttpResponse(credentials.qr_png(token), content_type='image/png')


def download_ticket_pdf(request, uuid):
    """
    Generates a PDF badge for the participant to download.
    """
    registration = get_object_or_404(Registration.objects.select_related('event', 'participant'), uuid=uuid)
    try:
        pdf_file = credentials.render_registration_badge(registration)
    except RegistrationError as exc:
        return HttpResponse(exc.message, status=exc.status_code)

    response = HttpResponse(pdf_file, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="badge-{registration.event.slug}.pdf"'
    return response


# --- MIXIN FOR STAFF ONLY ACCESS ---
class StaffRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    def test_func(self):
        return self.request.user.is_staff


class StaffHomeView(StaffRequiredMixin, ListView):
    model = Event
    template_name = 'registry/dashboard/staff_home.html'
    context_object_name = 'events'


class EventDashboardView(StaffRequiredMixin, DetailView):
    model = Event
    template_name = 'registry/dashboard/event_dashboard.html'
    context_object_name = 'event'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        registrations = self.object.registrations.all().select_related('participant')

        # Stats for cards
        context['total_count'] = registrations.count()
        context['confirmed_count'] = registrations.filter(status=Registration.Status.CONFIRMED).count()
        context['pending_count'] = registrations.filter(status=Registration.Status.PENDING).count()
        context['checked_in_count'] = registrations.filter(checked_in_at__isnull=False).count()
        context['seats_left'] = max(self.object.capacity - context['confirmed_count'], 0)

        # Filter logic
        status_filter = self.request.GET.get('status', 'all')
        if status_filter != 'all':
            registrations = registrations.filter(status=status_filter)

        rows = []
        for reg in registrations:
            issues = []
            if reg.status == Registration.Status.PENDING:
                issues = eligibility.eligibility_issues(self.object, reg.participant)
            rows.append({'reg': reg, 'issues': issues})

        context['rows'] = rows
        context['status_filter'] = status_filter
        context['statuses'] = Registration.Status.choices
        return context


def _decide(request, pk, decision):
    if not request.user.is_staff:
        return HttpResponse("Unauthorized", status=403)

    registration = get_object_or_404(Registration, pk=pk)
    form = DecisionForm(request.POST)
    comment = form.cleaned_data['comment'] if form.is_valid() else ''

    error = None
    try:
        registration = services.decide(registration.pk, decision, request.user, comment)
    except RegistrationError as exc:
        error = exc
        registration.refresh_from_db()

    if request.htmx:
        # Return the updated row partial
        return render(request, 'registry/dashboard/partials/registration_row.html', {
            'reg': registration,
            'issues': eligibility.eligibility_issues(registration.event, registration.participant),
            'error': error.message if error else None,
        })

    if error:
        messages.error(request, error.message)
    else:
        messages.success(request, f"{registration.participant.name}: {registration.get_status_display()}")
    return redirect('registry:event-dashboard', pk=registration.event_id)


@login_required
@require_POST
def approve_registration(request, pk):
    return _decide(request, pk, services.APPROVE)


@login_required
@require_POST
def reject_registration(request, pk):
    return _decide(request, pk, services.REJECT)


@login_required
def staff_check_in(request, event_id):
    if not request.user.is_staff:
        return HttpResponse("Unauthorized", status=403)

    event = get_object_or_404(Event, pk=event_id)
    return render(request, 'registry/dashboard/check_in.html', {
        'event': event,
        'form': CheckInForm(),
    })


# Process Scan (HTMX Endpoint)
@login_required
@require_POST
def process_check_in(request, event_id):
    if not request.user.is_staff:
        return HttpResponse("Unauthorized", status=403)

    event = get_object_or_404(Event, pk=event_id)
    form = CheckInForm(request.POST)
    if not form.is_valid():
        return render(request, 'registry/dashboard/partials/check_in_result.html', {
            'success': False,
            'message': "No ticket scanned.",
        }, status=200 if request.htmx else 400)

    try:
        result = checkin.check_in(event.pk, form.cleaned_data['token'], actor=request.user)
    except RegistrationError as exc:
        return render(request, 'registry/dashboard/partials/check_in_result.html', {
            'success': False,
            'code': exc.code,
            'message': exc.message,
        }, status=200 if request.htmx else exc.status_code)

    registration = result.registration
    if result.first_check_in:
        message = f"Welcome, {registration.participant.name}!"
    else:
        message = f"{registration.participant.name} already checked in at {registration.checked_in_at:%H:%M}."

    return render(request, 'registry/dashboard/partials/check_in_result.html', {
        'success': True,
        'first_check_in': result.first_check_in,
        'message': message,
        'registration': registration,
    })


@login_required
def export_registrations_csv(request, pk):
    if not request.user.is_staff:
        return HttpResponse("Unauthorized", status=403)

    event = get_object_or_404(Event, pk=pk)
    registrations = event.registrations.select_related('participant').order_by('created_at')

    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="registrations-{event.slug}.csv"'

    writer = csv.writer(response)
    writer.writerow([
        'Name', 'Email', 'Phone', 'Study Level', 'Study Program',
        'Status', 'Registered At', 'Decided At', 'Checked In At',
    ])
    for reg in registrations:
        participant = reg.participant
        writer.writerow([
            participant.name,
            participant.email,
            participant.phone,
            participant.study_level,
            participant.study_program,
            reg.status,
            reg.created_at.isoformat(),
            reg.decided_at.isoformat() if reg.decided_at else '',
            reg.checked_in_at.isoformat() if reg.checked_in_at else '',
        ])

    logger.info("Exported %d registrations for %s", registrations.count(), event.slug)
    return response


def find_ticket(request):
    """
    Lets a participant check which events an email address is registered for.
    Ticket links are never listed here: the ticket URL is only shown on the
    page that confirms the registration.
    """
    if request.method == 'POST':
        email = request.POST.get('email', '').strip()

        participant = Participant.objects.filter(email__iexact=email).first()
        if participant:
            registrations = participant.registrations.select_related('event').order_by('-created_at')
            if registrations:
                summary = [
                    {'event_title': reg.event.title, 'status': reg.get_status_display()}
                    for reg in registrations
                ]
                return render(request, 'registry/find_ticket.html', {'summary': summary})

        messages.error(request, "No registration found with that email address.")

    return render(request, 'registry/find_ticket.html')
