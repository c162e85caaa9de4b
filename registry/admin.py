from django.contrib import admin
from .models import Event, Participant, Registration


admin.site.site_header = "EventPass Registrations"
admin.site.site_title = "EventPass Admin"
admin.site.index_title = "EventPass Dashboard"

# --- INLINES ---

class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0
    fields = ('participant', 'status', 'created_at', 'checked_in_at')
    readonly_fields = ('participant', 'status', 'created_at', 'checked_in_at')
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False

# --- ADMINS ---

@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('title', 'start_at', 'location', 'capacity', 'requires_approval', 'status', 'is_published')
    list_filter = ('status', 'is_published', 'requires_approval', 'start_at')
    search_fields = ('title', 'location')
    prepopulated_fields = {'slug': ('title',)}
    inlines = [RegistrationInline]

@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'phone', 'study_level', 'study_program')
    list_filter = ('study_level',)
    search_fields = ('name', 'email')

@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('participant', 'event', 'status', 'created_at', 'checked_in_at')
    list_filter = ('status', 'event', 'created_at')
    search_fields = ('participant__name', 'participant__email')
    # Lifecycle fields only change through the registration services
    readonly_fields = (
        'uuid', 'status', 'created_at', 'decided_at', 'decided_by',
        'decision_comment', 'token', 'checked_in_at', 'checked_in_by',
    )
