"""Pure helpers behind the resource store.

Identifier translation, input normalization, list query construction
and record mapping. None of these touch the database.
"""

from resource_service.resources.identifiers import decode_id, encode_id
from resource_service.resources.mapper import (
    format_timestamp,
    parse_timestamp,
    row_to_record,
    to_resource,
)
from resource_service.resources.normalizer import (
    InvalidResourceInput,
    normalize_create,
    normalize_update,
)
from resource_service.resources.query import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    PageWindow,
    ResourceQuery,
    build_query,
    clamp_window,
)

__all__ = [
    "DEFAULT_LIMIT",
    "InvalidResourceInput",
    "MAX_LIMIT",
    "PageWindow",
    "ResourceQuery",
    "build_query",
    "clamp_window",
    "decode_id",
    "encode_id",
    "format_timestamp",
    "normalize_create",
    "normalize_update",
    "parse_timestamp",
    "row_to_record",
    "to_resource",
]
