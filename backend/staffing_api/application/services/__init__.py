from .concurrency_guard import check_token, fresh_last_update, require_token
from .id_allocator import IdAllocator
from .query_filter import ListQuery, Page, collect_filter_values, filter_and_paginate, parse_active_only
from .reference_expander import ExpandedPage, ExpandedRecord, ReferenceExpander
from .resource_service import ResourceService

__all__ = [
    "check_token",
    "fresh_last_update",
    "require_token",
    "IdAllocator",
    "ListQuery",
    "Page",
    "collect_filter_values",
    "filter_and_paginate",
    "parse_active_only",
    "ExpandedPage",
    "ExpandedRecord",
    "ReferenceExpander",
    "ResourceService",
]
