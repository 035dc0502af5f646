import pytest
from io import StringIO
from django.core.management import call_command
from django.urls import reverse
from evaluation_app.models import EvaluationSubmission, EvaluationType, SubmissionKind
from evaluation_app.services import evaluation_store
from evaluation_app.tests.conftest import full_sections


@pytest.mark.django_db
class TestLogin:
    def test_login_with_email_returns_tokens_and_role(self, api_client, create_user):
        create_user(email="rater@test.local", role="SUPERVISOR", name="Rae")
        res = api_client.post(reverse("jwt-login"),
                              {"email": "rater@test.local", "password": "pass12345"}, format="json")
        assert res.status_code == 200
        assert {"access", "refresh"} <= set(res.data)
        assert res.data["role"] == "Supervisor"
        assert res.data["name"] == "Rae"

    def test_wrong_password_is_400(self, api_client, create_user):
        create_user(email="rater@test.local")
        res = api_client.post(reverse("jwt-login"),
                              {"email": "rater@test.local", "password": "nope"}, format="json")
        assert res.status_code == 400
        assert res.data["error"] == "Invalid credentials."

    def test_endpoints_need_a_token(self, api_client):
        assert api_client.get(reverse("criteria-list")).status_code == 401


@pytest.mark.django_db
class TestCommands:
    def test_seed_types_is_idempotent(self):
        call_command("seed_types", stdout=StringIO())
        call_command("seed_types", stdout=StringIO())
        assert EvaluationType.objects.count() == 4
        assert sum(t.section_percentage for t in EvaluationType.objects.all()) == 100

    def test_recompute_results_repairs_stale_rows(self, create_user):
        subject, rater = create_user(), create_user()
        sub = evaluation_store.submit(SubmissionKind.PEER, subject_id=subject.pk,
                                      rater_id=rater.pk, sections=full_sections())
        own = evaluation_store.submit(SubmissionKind.SELF, subject_id=subject.pk,
                                      sections=full_sections())
        EvaluationSubmission.objects.filter(pk__in=[sub.pk, own.pk]).update(results={"overallResult": 0})

        out = StringIO()
        call_command("recompute_results", "--kind", "peer", stdout=out)
        assert "Recomputed 1 evaluations." in out.getvalue()

        sub.refresh_from_db()
        own.refresh_from_db()
        assert sub.results["overallResult"] == 100.0
        assert own.results == {"overallResult": 0}
