"""
PyReselect：以記憶化方式從狀態中衍生資料的選擇器函式庫。
"""

from .errors import ReselectError, ValidationError, ConfigurationError
from .memoize import (
    default_memoize, identity_equality, shallow_equal,
    hash_memoize, HashMemoizeOptions
)
from .selectors import (
    create_selector, create_selector_creator, create_structured_selector
)
from .operators import select
from .debug import log_selector

# 匯出所有公開 API
__all__ = [
    # Errors
    "ReselectError", "ValidationError", "ConfigurationError",

    # Memoize
    "default_memoize", "identity_equality", "shallow_equal",
    "hash_memoize", "HashMemoizeOptions",

    # Selectors
    "create_selector", "create_selector_creator", "create_structured_selector",

    # Operators
    "select",

    # Debug
    "log_selector",
]
