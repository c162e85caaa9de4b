from django import template

register = template.Library()


@register.filter
def count_status(queryset, status):
    # usage: event.registrations.all|count_status:'CONFIRMED'
    return queryset.filter(status=status).count()
