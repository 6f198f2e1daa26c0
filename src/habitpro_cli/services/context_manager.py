"""Strategy bootstrap for HabitPro CLI.

Usage Pattern:
    from habitpro_cli.services.context_manager import get_strategy_context

    strategy = get_strategy_context()
    tasks = await strategy.task_repository.list_all()
"""

from __future__ import annotations

from functools import lru_cache

from habitpro_cli.models.strategy import LocalStrategy, MemoryStrategy, StrategyContext
from habitpro_cli.services.config_service import get_config_service
from habitpro_cli.utils.logger import get_logger


@lru_cache(maxsize=1)
def get_strategy_context() -> StrategyContext:
    """Get a cached StrategyContext for the configured storage backend.

    Returns:
        StrategyContext: Configured strategy with all repositories
    """
    config_svc = get_config_service()
    storage = config_svc.config.storage

    if storage.type == "memory":
        strategy = MemoryStrategy()
    else:
        strategy = LocalStrategy(db_path=config_svc.db_path)

    get_logger().debug("storage strategy: %s", strategy.storage_type)
    return StrategyContext(strategy)
