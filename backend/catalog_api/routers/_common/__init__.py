"""
Helpers shared by the resource routers.
"""

from .conditional import etag_for, not_modified, require_if_match
from .pagination import (
    CountOutput,
    PageOutput,
    get_pageable,
    get_search_params,
    page_output,
)
from .uploads import file_response, read_upload

__all__ = [
    "etag_for",
    "not_modified",
    "require_if_match",
    "CountOutput",
    "PageOutput",
    "get_pageable",
    "get_search_params",
    "page_output",
    "file_response",
    "read_upload",
]
