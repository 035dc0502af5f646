from rest_framework import serializers
from evaluation_app.models import EvaluationSubmission


class SubmissionCreateSerializer(serializers.Serializer):
    # --WRITE-ONLY--
    user_id  = serializers.UUIDField(required=False)
    rater_id = serializers.UUIDField(required=False, allow_null=True)
    tid      = serializers.IntegerField(required=False, allow_null=True)
    sections = serializers.DictField()
    period   = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")


class SubmissionUpdateSerializer(serializers.Serializer):
    sections = serializers.DictField()


class SubmissionSerializer(serializers.ModelSerializer):
    """Stored submission with its derived results (read-only)."""
    eid        = serializers.IntegerField(read_only=True)
    kind       = serializers.CharField(source="get_kind_display", read_only=True)
    user_id    = serializers.UUIDField(source="subject_id", read_only=True)
    user       = serializers.CharField(source="subject.name", read_only=True)
    rater_id   = serializers.UUIDField(read_only=True, allow_null=True)
    rater      = serializers.CharField(source="rater.name", read_only=True, default=None)
    tid        = serializers.IntegerField(source="evaluation_type_id", read_only=True, allow_null=True)
    sections   = serializers.JSONField(read_only=True)
    results    = serializers.JSONField(read_only=True)
    period     = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)

    class Meta:
        model = EvaluationSubmission
        fields = [
            "eid",
            "kind",
            "user_id", "user",
            "rater_id", "rater",
            "tid",
            "sections",
            "results",
            "period",
            "created_at", "updated_at",
        ]
