import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """
    ``?page=<n>&limit=<size>`` pagination.

    Views name the list key through a ``results_key`` attribute
    (``bookings``, ``users``...), defaulting to ``results``.
    """

    page_size = 20
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = 100

    def paginate_queryset(self, queryset, request, view=None):
        self.results_key = getattr(view, "results_key", "results")
        return super().paginate_queryset(queryset, request, view)

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        page_size = self.page.paginator.per_page
        return Response({
            "success": True,
            "count": len(data),
            "total": total,
            "page": self.page.number,
            "totalPages": math.ceil(total / page_size) if page_size else 0,
            self.results_key: data,
        })
