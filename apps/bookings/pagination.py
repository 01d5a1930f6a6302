"""Page-number pagination with a ``data``/``metadata`` envelope."""

from __future__ import annotations

import math

from django.conf import settings  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore


class MetadataPagination(PageNumberPagination):
    page_size = settings.BOOKING_PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = settings.BOOKING_MAX_PAGE_SIZE

    def get_metadata(self) -> dict:
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return {
            "total": total,
            "page": self.page.number,
            "limit": limit,
            "totalPages": math.ceil(total / limit) if limit else 0,
        }

    def get_paginated_data(self, data) -> dict:
        return {"data": data, "metadata": self.get_metadata()}

    def get_paginated_response(self, data):  # type: ignore
        return Response(self.get_paginated_data(data))

    def get_paginated_response_schema(self, schema):  # type: ignore
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "metadata": {
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
