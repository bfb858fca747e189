"""
趋势判断
提供可互换的趋势策略，默认按金属选择策略
"""
from typing import Callable, Dict, List, Optional, Sequence

from model import Quote, HistoryPoint


# ======================
# 类型定义
# ======================
TREND_UP = "up"
TREND_DOWN = "down"
TREND_NEUTRAL = "neutral"

# 趋势策略函数签名: (history, quote) -> "up" / "down" / "neutral"
TrendStrategy = Callable[[Sequence[HistoryPoint], Optional[Quote]], str]

SMA_WINDOW = 7


# ======================
# 内置策略
# ======================
def sma_trend(history: Sequence[HistoryPoint], quote: Optional[Quote]) -> str:
    """
    均线策略

    取周线走势最早的 7 个点计算简单移动平均，
    当前每克价格高于均线为 up，否则为 down。
    数据不足 7 个点或无报价时为 neutral。
    """
    if quote is None or len(history) < SMA_WINDOW:
        return TREND_NEUTRAL
    window = history[:SMA_WINDOW]
    sma = sum(point.price for point in window) / SMA_WINDOW
    return TREND_UP if quote.price_per_gram > sma else TREND_DOWN


def change_trend(history: Sequence[HistoryPoint], quote: Optional[Quote]) -> str:
    """
    涨跌幅策略

    当日涨跌幅 ≥ 0 为 up，否则为 down；无报价时为 neutral。
    """
    if quote is None:
        return TREND_NEUTRAL
    return TREND_UP if quote.chp >= 0 else TREND_DOWN


# ======================
# 策略注册表
# ======================
STRATEGIES: Dict[str, TrendStrategy] = {
    "sma": sma_trend,
    "change": change_trend,
}

# 各金属默认策略
METAL_STRATEGIES: Dict[str, str] = {
    "XAU": "sma",
    "XAG": "change",
}


def get_strategy(name: str) -> TrendStrategy:
    """按名称获取策略"""
    if name not in STRATEGIES:
        raise ValueError(f"未知趋势策略: {name}")
    return STRATEGIES[name]


def strategy_for_metal(metal: str) -> str:
    """金属对应的默认策略名称"""
    return METAL_STRATEGIES.get(metal, "change")


def estimate_trend(
    metal: str,
    history: Optional[List[HistoryPoint]],
    quote: Optional[Quote],
    strategy: Optional[str] = None,
) -> str:
    """
    判断趋势

    Args:
        metal: 金属代码，用于选择默认策略
        history: 周线走势（change 策略不使用）
        quote: 当前报价
        strategy: 指定策略名称，为 None 时按金属选择

    Returns:
        "up" / "down" / "neutral"
    """
    name = strategy or strategy_for_metal(metal)
    return get_strategy(name)(history or [], quote)
