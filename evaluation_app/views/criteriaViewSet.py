from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from evaluation_app.filters import CriterionFilter
from evaluation_app.pagination import PageLimitPagination
from evaluation_app.permissions import IsAdmin
from evaluation_app.serializers.criteria_serializer import CriterionSerializer
from evaluation_app.services import criteria_catalog
from evaluation_app.services.weight_ledger import remaining_capacity


class CriterionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    • GET    /criteria/?tid=&page=&limit=  → paginated list, optionally per type
    • GET    /criteria/{cid}/              → one criterion
    • POST   /criteria/                    → admin only, weight-capacity guarded
    • PUT    /criteria/{cid}/              → admin only, partial bodies allowed
    • DELETE /criteria/{cid}/              → admin only, frees the weight
    """
    serializer_class = CriterionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PageLimitPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = CriterionFilter
    lookup_field = "cid"

    def get_permissions(self):
        if self.action in ("create", "update", "partial_update", "destroy"):
            return [IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        return criteria_catalog.list_criteria()

    def get_object(self):
        return criteria_catalog.get_criterion(self.kwargs[self.lookup_field])

    def create(self, request, *args, **kwargs):
        criterion = criteria_catalog.create_criterion(request.data)
        return Response({
            "message": "Criteria created successfully",
            "criteria": self.get_serializer(criterion).data,
            "remaining": remaining_capacity(criterion.type_id),
        }, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        criterion = criteria_catalog.update_criterion(self.kwargs[self.lookup_field], request.data)
        return Response({
            "message": "Criteria updated successfully",
            "criteria": self.get_serializer(criterion).data,
            "remaining": remaining_capacity(criterion.type_id),
        })

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        criteria_catalog.delete_criterion(self.kwargs[self.lookup_field])
        return Response(
            {"message": "Criteria deleted successfully"},
            status=status.HTTP_200_OK,
        )
