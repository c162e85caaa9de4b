# registry/urls.py
from django.urls import path
from .views import (
    EventListView, EventDetailView, event_register, eligibility_check,
    registration_detail, cancel_registration, registration_credential,
    registration_qr_code, download_ticket_pdf,
    StaffHomeView, EventDashboardView, approve_registration, reject_registration,
    staff_check_in, process_check_in, export_registrations_csv, find_ticket,
)

app_name = 'registry'

urlpatterns = [
    path('', EventListView.as_view(), name='event-list'),
    path('event/<slug:slug>/', EventDetailView.as_view(), name='event-detail'),
    path('event/<slug:slug>/register/', event_register, name='event-register'),
    path('event/<slug:slug>/eligibility/', eligibility_check, name='eligibility-check'),

    # Tickets
    path('ticket/<uuid:uuid>/', registration_detail, name='registration-detail'),
    path('ticket/<uuid:uuid>/cancel/', cancel_registration, name='cancel-registration'),
    path('ticket/<uuid:uuid>/credential/', registration_credential, name='registration-credential'),
    path('ticket/<uuid:uuid>/qr/', registration_qr_code, name='registration-qr'),
    path('ticket/<uuid:uuid>/download/', download_ticket_pdf, name='download-ticket'),
    path('find-ticket/', find_ticket, name='find-ticket'),

    # Dashboard
    path('dashboard/', StaffHomeView.as_view(), name='staff-home'),
    path('dashboard/event/<int:pk>/', EventDashboardView.as_view(), name='event-dashboard'),
    path('dashboard/event/<int:pk>/export/', export_registrations_csv, name='export-csv'),

    # HTMX Actions
    path('registration/<int:pk>/approve/', approve_registration, name='approve-registration'),
    path('registration/<int:pk>/reject/', reject_registration, name='reject-registration'),

    # Check-in
    path('dashboard/event/<int:event_id>/checkin/', staff_check_in, name='staff-checkin'),
    path('dashboard/event/<int:event_id>/checkin/scan/', process_check_in, name='process-checkin'),
]
