# =============================================================================
# app/revalidation/__init__.py - View Invalidation Module
# =============================================================================
# Tells page renderers which cached views to rebuild after a mutation.
#
# Usage:
#   from app.revalidation import RedisViewInvalidator, paths
#
#   invalidator = RedisViewInvalidator(settings.REDIS_URL)
#   invalidator.invalidate(paths.category_paths())
# =============================================================================

from app.revalidation import paths
from app.revalidation.broadcast import (
    REVALIDATE_CHANNEL,
    NullViewInvalidator,
    RedisViewInvalidator,
    ViewInvalidator,
    build_event,
)
from app.revalidation.manager import renderer_manager

__all__ = [
    "paths",
    "REVALIDATE_CHANNEL",
    "NullViewInvalidator",
    "RedisViewInvalidator",
    "ViewInvalidator",
    "build_event",
    "renderer_manager",
]
