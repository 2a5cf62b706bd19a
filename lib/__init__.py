# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase client factory, query execution and row decoding
# - utils.py: Shared helpers (UUIDs, slugs, price normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import create_supabase_client, decode_row, decode_rows, execute
from lib.utils import blank_to_none, file_extension, normalize_price, slugify

__all__ = [
    # Supabase
    "create_supabase_client",
    "decode_row",
    "decode_rows",
    "execute",
    # Utils
    "blank_to_none",
    "file_extension",
    "normalize_price",
    "slugify",
]
