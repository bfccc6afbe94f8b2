"""
Query Module
"""
from .builder import build_request
from .models import DataRequest, DataResponse

__all__ = [
    "build_request",
    "DataRequest",
    "DataResponse",
]
