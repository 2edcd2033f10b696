from .freshness_service import FreshnessService
from .seed import seed_if_empty

__all__ = ["FreshnessService", "seed_if_empty"]
