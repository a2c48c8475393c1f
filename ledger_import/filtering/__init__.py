from .basic import check_value
from .conditions import (
    NAMED_FILTERS,
    UnknownFilterFieldError,
    check_conditions,
    check_key,
    check_raw,
    filter_transactions,
)
from .helpers import TrType, get_type, is_deleted, is_viewed

__all__ = [
    'check_value',
    'NAMED_FILTERS',
    'UnknownFilterFieldError',
    'check_conditions',
    'check_key',
    'check_raw',
    'filter_transactions',
    'TrType',
    'get_type',
    'is_deleted',
    'is_viewed',
]
