import django_filters as filters
from evaluation_app.models import Criterion


class CriterionFilter(filters.FilterSet):
    # ?tid=<type id> narrows the list to one evaluation type
    tid = filters.NumberFilter(field_name="type_id", lookup_expr="exact")

    class Meta:
        model = Criterion
        fields = ["tid"]
