"""
模拟历史走势生成器
基于静态基准价做有界随机游走，每次调用独立生成
"""
import random
from datetime import datetime
from typing import List, Optional

from model import HistoryPoint, utc_now, TROY_OUNCE_TO_GRAM, CITY_VARIANCE, CURRENCY_FACTORS, MOCK_BASES, check_params
from model.market import RANGE_STEPS


def generate_mock_history(
    metal: str,
    currency: str,
    time_range: str,
    city: str = "National",
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[HistoryPoint]:
    """
    生成模拟历史走势（货币/克，按时间升序）

    - 1D: 30 分钟一个点，共 49 个点
    - 1W: 每天一个点，共 8 个点
    - 1M: 每天一个点，共 31 个点

    最后一个点的时间即 now（默认当前 UTC 时间）。城市溢价作用于起始价，National 与全国走势一致。

    Raises:
        ValueError: 参数不在支持范围内
    """
    check_params(metal, currency, city)
    if time_range not in RANGE_STEPS:
        raise ValueError(f"不支持的时间范围: {time_range}")

    rng = rng or random.Random()
    now = now or utc_now()
    step, steps, amplitude = RANGE_STEPS[time_range]

    factor = CURRENCY_FACTORS[currency]
    gram_factor = factor / TROY_OUNCE_TO_GRAM

    # 起始价直接换算为每克价格
    price = MOCK_BASES[metal]["price"] * (1 + CITY_VARIANCE[city]) * gram_factor

    points: List[HistoryPoint] = []
    for i in range(steps, -1, -1):
        price += rng.uniform(-amplitude, amplitude) * gram_factor
        points.append(HistoryPoint(date=now - step * i, price=round(price, 2)))

    return points
