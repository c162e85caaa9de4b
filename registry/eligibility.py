"""
Eligibility rules for events restricted by study level and study program.

Everything here is a pure function of the event and participant, so the
registration service, the registration form and the pre-check endpoint all
reach the same verdict.
"""
from collections import namedtuple

LEVEL_MISMATCH = "study level does not match requirements"
PROGRAM_MISMATCH = "study program does not match requirements"

Eligibility = namedtuple('Eligibility', ['eligible', 'reason'])

ELIGIBLE = Eligibility(True, '')


def evaluate(event, participant):
    """
    Returns an ``Eligibility`` for ``participant`` at ``event``.

    Both axes are checked independently and must both pass. An unset study
    level or program never matches a restricted axis.
    """
    levels = event.eligible_levels or []
    programs = event.eligible_programs or []

    if not levels and not programs:
        return ELIGIBLE

    if levels and participant.study_level not in levels:
        return Eligibility(False, LEVEL_MISMATCH)

    if programs and participant.study_program not in programs:
        return Eligibility(False, PROGRAM_MISMATCH)

    return ELIGIBLE


def gate_applies(event):
    # Eligibility only gates intake for events that go through approval
    return event.requires_approval and event.has_eligibility_rules


def registration_gate(event, participant):
    """Verdict used at registration intake."""
    if not gate_applies(event):
        return ELIGIBLE
    return evaluate(event, participant)


def eligibility_issues(event, participant):
    """All failing axes, worded for the staff dashboard."""
    issues = []
    if event.eligible_levels and participant.study_level not in event.eligible_levels:
        issues.append(f"Study level ({participant.get_study_level_display() or 'Not specified'}) not eligible")
    if event.eligible_programs and participant.study_program not in event.eligible_programs:
        issues.append(f"Study program ({participant.get_study_program_display() or 'Not specified'}) not eligible")
    return issues
