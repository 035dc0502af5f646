import json
import pytest
from django.urls import reverse
from evaluation_app.models import Criterion, EvaluationSubmission, SubmissionKind
from evaluation_app.services.weight_ledger import allocated_weight
from evaluation_app.tests.conftest import full_sections


@pytest.mark.django_db
class TestCriterionAdmin:
    def _post(self, client, url, evaluation_type, weight, **kw):
        data = {"type": evaluation_type.pk, "criteria": "Accuracy", "weight": weight, "level": 2}
        data.update(kw)
        return client.post(url, data)

    def test_add_past_capacity_is_a_form_error(self, staff_client, create_type, create_criterion):
        t = create_type()
        create_criterion(t, weight=60)

        res = self._post(staff_client, reverse("admin:evaluation_app_criterion_add"), t, "45")
        assert res.status_code == 200
        assert "Remaining: 40.00" in res.content.decode()
        assert Criterion.objects.filter(type=t).count() == 1
        assert allocated_weight(t.tid) <= 100

    def test_add_within_capacity_goes_through(self, staff_client, create_type, create_criterion):
        t = create_type()
        create_criterion(t, weight=60)

        res = self._post(staff_client, reverse("admin:evaluation_app_criterion_add"), t, "40")
        assert res.status_code == 302
        assert allocated_weight(t.tid) == 100

    def test_change_excludes_own_weight(self, staff_client, create_type, create_criterion):
        t = create_type()
        create_criterion(t, weight=60)
        c = create_criterion(t, weight=30)
        url = reverse("admin:evaluation_app_criterion_change", args=[c.cid])

        res = self._post(staff_client, url, t, "50")
        assert res.status_code == 200
        assert "Remaining (excluding this row): 40.00" in res.content.decode()

        assert self._post(staff_client, url, t, "40").status_code == 302
        c.refresh_from_db()
        assert c.weight == 40

    def test_type_page_lists_criteria_read_only(self, staff_client, create_type, create_criterion):
        t = create_type()
        create_criterion(t, weight=60)
        res = staff_client.get(reverse("admin:evaluation_app_evaluationtype_change", args=[t.tid]))
        assert res.status_code == 200
        assert 'name="criteria-0-weight"' not in res.content.decode()


@pytest.mark.django_db
class TestSubmissionAdmin:
    def _post(self, client, subject, sections):
        return client.post(reverse("admin:evaluation_app_evaluationsubmission_add"), {
            "kind": SubmissionKind.SELF,
            "subject": str(subject.pk),
            "rater": "",
            "evaluation_type": "",
            "sections": json.dumps(sections),
            "period": "2025-H1",
        })

    def test_bad_rating_is_a_form_error(self, staff_client, employee_user):
        res = self._post(staff_client, employee_user, full_sections(a1=9))
        assert res.status_code == 200
        assert "Invalid level score for a1: 9. Must be between 1 and 4." in res.content.decode()
        assert EvaluationSubmission.objects.count() == 0

    def test_valid_sections_are_scored_on_save(self, staff_client, employee_user):
        res = self._post(staff_client, employee_user, full_sections())
        assert res.status_code == 302
        assert EvaluationSubmission.objects.get().results["overallResult"] == 100.0
