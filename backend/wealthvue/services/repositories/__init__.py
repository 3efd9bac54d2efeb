"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services use repositories for data access rather than
querying SQLAlchemy models directly.

Dependency direction: Services -> Repositories -> Models
"""

from .asset_repository import AssetRepository
from .exceptions import NotFoundError, RepositoryError
from .fx_cache_repository import FxCacheRepository
from .goal_repository import GoalRepository
from .nav_history_repository import NavHistoryRepository

__all__ = [
    "AssetRepository",
    "FxCacheRepository",
    "GoalRepository",
    "NavHistoryRepository",
    "NotFoundError",
    "RepositoryError",
]
