# evaluation_app/urls/api.py
from rest_framework.routers import DefaultRouter
from evaluation_app.views.auth import EmailLoginView
from evaluation_app.views.criteriaViewSet import CriterionViewSet
from evaluation_app.views.typeViewSet import EvaluationTypeViewSet
from evaluation_app.views.submissionViewSet import SubmissionViewSet
from evaluation_app.urls.converters import SubmissionKindConverter

from django.urls import path, register_converter
from rest_framework_simplejwt.views import TokenRefreshView

register_converter(SubmissionKindConverter, "evalkind")

router = DefaultRouter()

router.register("types", EvaluationTypeViewSet, basename="type")       #GET /api/types/  & GET /api/types/{tid}/
router.register("criteria", CriterionViewSet, basename="criteria")     #GET /api/criteria/?tid=&page=&limit=

submission_create = SubmissionViewSet.as_view({"post": "create"})
submission_detail = SubmissionViewSet.as_view({
    "get": "retrieve",
    "put": "update",
    "patch": "partial_update",
    "delete": "destroy",
})
submission_by_subject = SubmissionViewSet.as_view({"get": "by_subject"})

urlpatterns = [
    # JWT
    path("auth/login/",   EmailLoginView.as_view(),   name="jwt-login"),
    path("auth/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),

    # Evaluations: POST /api/evaluations/self/ , PUT|DELETE /api/evaluations/peer/{eid}/ ,
    # GET /api/evaluations/supervisor/{user_id}/
    path("evaluations/<evalkind:kind>/", submission_create, name="submission-create"),
    path("evaluations/<evalkind:kind>/<int:eid>/", submission_detail, name="submission-detail"),
    path("evaluations/<evalkind:kind>/<uuid:user_id>/", submission_by_subject, name="submission-by-subject"),

    # REST resources
    *router.urls
]
