from rest_framework import viewsets, status
from rest_framework.response import Response
from evaluation_app.models import EvaluationType
from evaluation_app.permissions import ReadOnlyOrAdmin
from evaluation_app.serializers.type_serializer import EvaluationTypeSerializer


class EvaluationTypeViewSet(viewsets.ModelViewSet):
    """
    • GET    /types/        → list all evaluation types
    • GET    /types/{tid}/  → retrieve one
    • POST / PUT / PATCH    → admin only
    • DELETE /types/{tid}/  → admin only, refused (409) while criteria or
                              evaluations still reference the type
    """
    queryset = EvaluationType.objects.all().order_by("tid")
    serializer_class = EvaluationTypeSerializer
    permission_classes = [ReadOnlyOrAdmin]
    pagination_class = None
    lookup_field = "tid"

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response(
            {"message": "Type deleted successfully"},
            status=status.HTTP_200_OK,
        )
