from rest_framework import serializers
from evaluation_app.models import Criterion


class CriterionSerializer(serializers.ModelSerializer):
    """
    Read shape for criteria, flattened with the owning type's name and
    percentage. Writes go through services.criteria_catalog, which applies
    the weight-capacity guard.
    """
    cid                = serializers.IntegerField(read_only=True)
    tid                = serializers.IntegerField(source="type_id", read_only=True)
    criteria           = serializers.CharField(read_only=True)
    weight             = serializers.FloatField(read_only=True)
    level              = serializers.IntegerField(read_only=True)
    typeofevaluation   = serializers.CharField(source="type.name", read_only=True)
    section_percentage = serializers.FloatField(source="type.section_percentage", read_only=True)

    class Meta:
        model  = Criterion
        fields = [
            "cid",
            "tid",
            "criteria",
            "weight",
            "level",
            "typeofevaluation",
            "section_percentage",
        ]
