from decimal import Decimal
from rest_framework import serializers
from evaluation_app.models import EvaluationType
from evaluation_app.services.weight_ledger import remaining_capacity


class EvaluationTypeSerializer(serializers.ModelSerializer):
    tid                = serializers.IntegerField(read_only=True)
    name               = serializers.CharField(max_length=120)
    description        = serializers.CharField(allow_blank=True, required=False, default="")
    section_percentage = serializers.DecimalField(max_digits=5, decimal_places=2, coerce_to_string=False)

    # how much of the 100% criteria budget is still free
    remaining_weight   = serializers.SerializerMethodField(read_only=True)

    created_at         = serializers.DateTimeField(read_only=True)
    updated_at         = serializers.DateTimeField(read_only=True)

    class Meta:
        model = EvaluationType
        fields = [
            "tid",
            "name",
            "description",
            "section_percentage",
            "remaining_weight",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("tid", "created_at", "updated_at")

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Type name is required")
        return value

    def validate_section_percentage(self, value):
        if value <= Decimal("0") or value > Decimal("100"):
            raise serializers.ValidationError("Section percentage must be greater than 0 and at most 100")
        return value

    def get_remaining_weight(self, obj) -> float:
        return remaining_capacity(obj.tid)
