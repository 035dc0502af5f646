import pytest
from django.urls import reverse
from evaluation_app.models import EvaluationType


@pytest.mark.django_db
class TestEvaluationTypeViewSet:
    def test_admin_creates_type(self, api_client, admin_user):
        api_client.force_authenticate(user=admin_user)
        res = api_client.post(reverse("type-list"),
                              {"name": "Technical", "section_percentage": 70}, format="json")
        assert res.status_code == 201
        assert res.data["remaining_weight"] == 100.0
        assert EvaluationType.objects.get(pk=res.data["tid"]).name == "Technical"

    @pytest.mark.parametrize("pct", [0, -5, 100.5])
    def test_section_percentage_bounds(self, api_client, admin_user, pct):
        api_client.force_authenticate(user=admin_user)
        res = api_client.post(reverse("type-list"),
                              {"name": "Bad", "section_percentage": pct}, format="json")
        assert res.status_code == 400
        assert "section_percentage" in res.data["details"]

    def test_employee_reads_but_cannot_write(self, api_client, employee_user, create_type):
        t = create_type()
        api_client.force_authenticate(user=employee_user)
        assert api_client.get(reverse("type-detail", args=[t.tid])).status_code == 200
        res = api_client.patch(reverse("type-detail", args=[t.tid]), {"name": "Hacked"}, format="json")
        assert res.status_code == 403

    def test_remaining_weight_tracks_criteria(self, api_client, employee_user, create_type, create_criterion):
        t = create_type()
        create_criterion(t, weight=35)
        api_client.force_authenticate(user=employee_user)
        res = api_client.get(reverse("type-detail", args=[t.tid]))
        assert res.data["remaining_weight"] == 65.0

    def test_delete_refused_while_criteria_reference_type(self, api_client, admin_user, create_type, create_criterion):
        t = create_type()
        create_criterion(t)
        api_client.force_authenticate(user=admin_user)
        res = api_client.delete(reverse("type-detail", args=[t.tid]))
        assert res.status_code == 409
        assert EvaluationType.objects.filter(pk=t.tid).exists()

    def test_delete_unreferenced_type(self, api_client, admin_user, create_type):
        t = create_type()
        api_client.force_authenticate(user=admin_user)
        res = api_client.delete(reverse("type-detail", args=[t.tid]))
        assert res.status_code == 200
        assert not EvaluationType.objects.filter(pk=t.tid).exists()
