from .rate_provider import get_quote, get_history
from .trend import (
    estimate_trend,
    sma_trend,
    change_trend,
    get_strategy,
    strategy_for_metal,
    TrendStrategy,
)
from .dashboard import (
    splice_live_price,
    build_city_rates,
    build_closing_rates,
    build_snapshot,
    CityRate,
    ClosingRate,
    MetalSnapshot,
)
from .poller import RatePoller, RateCache
from .scheduler import (
    execute_task,
    register_processor,
    unregister_processor,
    clear_processors,
    TaskResult,
    TaskOptions,
    PostProcessor,
    TASK_TYPES,
)


__all__ = [
    "get_quote",
    "get_history",
    "estimate_trend",
    "sma_trend",
    "change_trend",
    "get_strategy",
    "strategy_for_metal",
    "TrendStrategy",
    "splice_live_price",
    "build_city_rates",
    "build_closing_rates",
    "build_snapshot",
    "CityRate",
    "ClosingRate",
    "MetalSnapshot",
    "RatePoller",
    "RateCache",
    "execute_task",
    "register_processor",
    "unregister_processor",
    "clear_processors",
    "TaskResult",
    "TaskOptions",
    "PostProcessor",
    "TASK_TYPES",
]
