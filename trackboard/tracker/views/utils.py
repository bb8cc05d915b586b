# ============================================
# tracker/views/utils.py
# ============================================
"""
Shared tooling for drf-spectacular docs on the tracker APIViews.
"""
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from rest_framework import serializers

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="TrackerError",
    fields={"detail": serializers.CharField()}
)

# ---- Param helpers

def path_uuid(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.UUID, OpenApiParameter.PATH, description=description)

def q_uuid(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.UUID, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False, enum=None):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description, enum=enum)

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

PAGE_PARAMS = [
    q_int("page", "Page number (default 1)"),
    q_int("page_size", "Page size"),
]

# ---- Convenience for common responses

def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found (also returned when the caller has no access)"),
    }
    if extra:
        errs.update(extra)
    return errs
