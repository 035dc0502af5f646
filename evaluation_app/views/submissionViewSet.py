from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from accounts.models import Role
from evaluation_app.models import SubmissionKind
from evaluation_app.permissions import (
    CanManageSubmission, CanViewSubjectSubmissions, is_admin
)
from evaluation_app.serializers.submission_serializer import (
    SubmissionCreateSerializer, SubmissionUpdateSerializer, SubmissionSerializer
)
from evaluation_app.services import evaluation_store


class SubmissionViewSet(viewsets.GenericViewSet):
    """
    One viewset for self / peer / supervisor evaluations; the kind comes
    from the URL (see urls/converters.py).

    Permissions
    -----------
    • ADMIN          → everything, may submit on behalf of any rater.
    • SELF           → submitted by the subject themselves.
    • PEER           → any authenticated user rating someone else.
    • SUPERVISOR     → SUPERVISOR (or ADMIN) callers only.
    • update/delete  → original rater (subject for SELF) or admin.
    • list by user   → admin, supervisors, or the subject.
    """
    serializer_class = SubmissionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None
    lookup_field = "eid"

    @property
    def kind(self) -> SubmissionKind:
        return self.kwargs["kind"]

    #----dynamic permissions----
    def get_permissions(self):
        if self.action in ("update", "partial_update", "destroy", "retrieve"):
            return [CanManageSubmission()]
        if self.action == "by_subject":
            return [CanViewSubjectSubmissions()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action == "create":
            return SubmissionCreateSerializer
        if self.action in ("update", "partial_update"):
            return SubmissionUpdateSerializer
        return SubmissionSerializer

    def get_object(self):
        obj = evaluation_store.get_submission(self.kind, self.kwargs[self.lookup_field])
        self.check_object_permissions(self.request, obj)
        return obj

    # ---- who may submit what ---------------------------------
    def _resolve_parties(self, data):
        user = self.request.user
        admin = is_admin(user)
        subject_id = data.get("user_id")
        rater_id = data.get("rater_id")

        if self.kind == SubmissionKind.SELF:
            subject_id = subject_id or user.pk
            if not admin and str(subject_id) != str(user.pk):
                self.permission_denied(self.request, message="You can only submit your own self evaluation.")
            return subject_id, None

        if self.kind == SubmissionKind.SUPERVISOR and user.role not in (Role.SUPERVISOR, Role.ADMIN):
            self.permission_denied(self.request, message="Only supervisors can submit supervisor evaluations.")

        rater_id = rater_id or user.pk
        if not admin and str(rater_id) != str(user.pk):
            self.permission_denied(self.request, message="You can only submit evaluations as yourself.")
        return subject_id, rater_id

    # ----------------------------------------------------------
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        subject_id, rater_id = self._resolve_parties(data)
        submission = evaluation_store.submit(
            self.kind,
            subject_id=subject_id,
            rater_id=rater_id,
            type_id=data.get("tid"),
            sections=data["sections"],
            period=data.get("period", ""),
        )
        return Response({
            "message": f"{self.kind.label} evaluation submitted",
            "eid": submission.pk,
            "results": submission.results,
        }, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        return Response(SubmissionSerializer(self.get_object()).data)

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = evaluation_store.update(self.kind, instance.pk, serializer.validated_data["sections"])
        return Response({
            "message": f"{self.kind.label} evaluation updated",
            "eid": submission.pk,
            "results": submission.results,
        })

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        evaluation_store.delete(self.kind, instance.pk)
        return Response({
            "message": f"{self.kind.label} evaluation deleted"
        }, status=status.HTTP_200_OK)

    def by_subject(self, request, *args, **kwargs):
        qs = evaluation_store.list_by_subject(self.kind, self.kwargs["user_id"])
        return Response(SubmissionSerializer(qs, many=True).data)
