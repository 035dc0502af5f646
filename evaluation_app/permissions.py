from rest_framework.permissions import BasePermission, SAFE_METHODS
from accounts.models import Role
from evaluation_app.models import SubmissionKind


def is_admin(user):
    return bool(user and user.is_authenticated and user.role == Role.ADMIN)


class IsAdmin(BasePermission):
    message = "Forbidden: admin only"

    def has_permission(self, request, view):
        return is_admin(request.user)


class ReadOnlyOrAdmin(BasePermission):
    """
    - SAFE methods (GET / HEAD / OPTIONS) → any authenticated user.
    - Mutating methods (POST / PUT / PATCH / DELETE) → Admin only.
    """
    message = "Forbidden: admin only"

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.role == Role.ADMIN


class CanManageSubmission(BasePermission):
    '''
    Admin may change any submission.
    Otherwise only whoever gave the rating: the rater for PEER / SUPERVISOR,
    the subject for SELF.
    '''
    message = "You can only change evaluations you submitted."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        user = request.user
        if is_admin(user):
            return True
        if obj.kind == SubmissionKind.SELF:
            return obj.subject_id == user.pk
        return obj.rater_id == user.pk


class CanViewSubjectSubmissions(BasePermission):
    """
    Admins and supervisors see anyone's evaluations.
    Employees only see the ones where they are the subject.
    """
    message = "You can only view your own evaluations."

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.role in (Role.ADMIN, Role.SUPERVISOR):
            return True
        return str(view.kwargs.get("user_id")) == str(user.pk)
