import math
from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


class PageLimitPagination(BasePagination):
    """
    ?page=&limit= paging. Missing, non-numeric or < 1 values fall back to
    page 1 / limit 10 instead of erroring.
    """
    page_query_param = "page"
    limit_query_param = "limit"
    default_limit = 10

    def paginate_queryset(self, queryset, request, view=None):
        self.page = _positive_int(request.query_params.get(self.page_query_param), 1)
        self.limit = _positive_int(request.query_params.get(self.limit_query_param), self.default_limit)
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response({
            "data": data,
            "pagination": {
                "total": self.total,
                "page": self.page,
                "limit": self.limit,
                "totalPages": math.ceil(self.total / self.limit),
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "total": {"type": "integer"},
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                    },
                },
            },
        }
