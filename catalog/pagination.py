"""Page/limit pagination for the product list.

Response shape: ``{"page", "limit", "total", "pages", "data"}``.
Unparsable values fall back to the defaults; `page` is clamped to >= 1 and
`limit` to [1, MAX_LIMIT]. A page past the end yields an empty `data` list
rather than a 404.
"""

import math

from rest_framework.pagination import BasePagination
from rest_framework.response import Response

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def _parse_int(raw, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


class PageLimitPagination(BasePagination):
    def paginate_queryset(self, queryset, request, view=None):
        self.page = max(1, _parse_int(request.query_params.get("page"), DEFAULT_PAGE))
        self.limit = min(MAX_LIMIT, max(1, _parse_int(request.query_params.get("limit"), DEFAULT_LIMIT)))
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset : offset + self.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "pages": max(1, math.ceil(self.total / self.limit)),
                "data": data,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["page", "limit", "total", "pages", "data"],
            "properties": {
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": DEFAULT_LIMIT},
                "total": {"type": "integer", "example": 42},
                "pages": {"type": "integer", "example": 5},
                "data": schema,
            },
        }
