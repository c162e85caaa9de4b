from django.test import SimpleTestCase

from registry import eligibility
from registry.models import Event, Participant


class EvaluateTestCase(SimpleTestCase):

    def event(self, levels=None, programs=None, requires_approval=True):
        return Event(
            title="Workshop", capacity=5, requires_approval=requires_approval,
            eligible_levels=levels or [], eligible_programs=programs or [],
        )

    def test_unrestricted_event_accepts_everyone(self):
        result = eligibility.evaluate(self.event(), Participant())
        self.assertEqual(result, (True, ''))

    def test_level_must_match(self):
        event = self.event(levels=['MASTER'])
        self.assertTrue(eligibility.evaluate(event, Participant(study_level='MASTER')).eligible)

        result = eligibility.evaluate(event, Participant(study_level='BACHELOR'))
        self.assertFalse(result.eligible)
        self.assertEqual(result.reason, "study level does not match requirements")

    def test_program_must_match(self):
        event = self.event(programs=['MASTER_M1', 'MASTER_M2'])
        self.assertTrue(eligibility.evaluate(event, Participant(study_program='MASTER_M2')).eligible)

        result = eligibility.evaluate(event, Participant(study_program='BACHELOR_S3'))
        self.assertEqual(result.reason, "study program does not match requirements")

    def test_unset_values_never_match_restricted_axis(self):
        event = self.event(levels=['MASTER'])
        self.assertFalse(eligibility.evaluate(event, Participant()).eligible)

        event = self.event(programs=['MASTER_M1'])
        self.assertFalse(eligibility.evaluate(event, Participant(study_level='MASTER')).eligible)

    def test_axes_are_conjunctive(self):
        event = self.event(levels=['MASTER'], programs=['MASTER_M1'])
        applicant = Participant(study_level='MASTER', study_program='MASTER_M2')
        result = eligibility.evaluate(event, applicant)
        self.assertEqual(result.reason, "study program does not match requirements")

        applicant = Participant(study_level='MASTER', study_program='MASTER_M1')
        self.assertTrue(eligibility.evaluate(event, applicant).eligible)

    def test_evaluate_is_deterministic(self):
        event = self.event(levels=['DOCTORATE'], programs=['DOCTORATE_Y1'])
        applicant = Participant(study_level='MASTER', study_program='MASTER_M1')
        self.assertEqual(
            eligibility.evaluate(event, applicant),
            eligibility.evaluate(event, applicant),
        )

    def test_gate_only_applies_to_approval_events(self):
        applicant = Participant(study_level='BACHELOR')

        open_event = self.event(levels=['MASTER'], requires_approval=False)
        self.assertTrue(eligibility.registration_gate(open_event, applicant).eligible)

        gated_event = self.event(levels=['MASTER'], requires_approval=True)
        self.assertFalse(eligibility.registration_gate(gated_event, applicant).eligible)

    def test_issues_list_every_failing_axis(self):
        event = self.event(levels=['MASTER'], programs=['MASTER_M1'])
        issues = eligibility.eligibility_issues(event, Participant(study_level='BACHELOR'))
        self.assertEqual(issues, [
            "Study level (Bachelor) not eligible",
            "Study program (Not specified) not eligible",
        ])
