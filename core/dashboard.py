"""
看板数据组装
组合实时报价与历史走势：实时价接入日内走势、城市对比表、历史收盘价表、金属概览
"""
import asyncio
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from model import Quote, HistoryPoint, utc_now, SUPPORTED_CITIES, DEFAULT_CITY, TROY_OUNCE_TO_GRAM
from core.rate_provider import get_quote, get_history
from core.trend import estimate_trend, strategy_for_metal


# ======================
# 数据结构
# ======================
@dataclass(frozen=True)
class CityRate:
    """城市对比表中的一行（货币/克）"""
    city: str
    gold_24k: float
    gold_22k: float
    silver: float


@dataclass(frozen=True)
class ClosingRate:
    """历史收盘价表中的一行（黄金 货币/10克，白银 货币/千克）"""
    date: datetime
    gold_per_10g: float
    silver_per_kg: float


@dataclass
class MetalSnapshot:
    """单个金属的看板数据"""
    metal: str
    currency: str
    city: str
    time_range: str
    quote: Quote
    history: List[HistoryPoint]
    trend: str
    strategy: str
    generated_at: datetime = field(default_factory=utc_now)


# ======================
# 组装函数
# ======================
def splice_live_price(
    history: List[HistoryPoint],
    current_price: Optional[float],
    time_range: str,
    now: Optional[datetime] = None,
) -> List[HistoryPoint]:
    """
    将实时每克价格接入日内走势

    仅对 1D 走势生效：最后一个点（即当前时刻）替换为实时价，时间更新为 now。
    返回新列表，不修改原走势。
    """
    points = list(history)
    if time_range != "1D" or not current_price or not points:
        return points
    points[-1] = HistoryPoint(date=now or utc_now(), price=current_price)
    return points


async def build_city_rates(
    currency: str,
    rng: Optional[random.Random] = None,
) -> List[CityRate]:
    """
    城市对比表：除全国均价外各城市的金银每克价格

    所有城市的黄金、白银报价并发获取。
    """
    cities = [city for city in SUPPORTED_CITIES if city != DEFAULT_CITY]

    async def _row(city: str) -> CityRate:
        gold, silver = await asyncio.gather(
            get_quote("XAU", currency, city, rng=rng),
            get_quote("XAG", currency, city, rng=rng),
        )
        return CityRate(
            city=city,
            gold_24k=gold.price_gram_24k,
            gold_22k=gold.price_gram_22k,
            silver=silver.price / TROY_OUNCE_TO_GRAM,
        )

    return list(await asyncio.gather(*(_row(city) for city in cities)))


async def build_closing_rates(
    currency: str,
    city: str = DEFAULT_CITY,
    days: int = 10,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[ClosingRate]:
    """
    历史收盘价表：最近 N 天的金银价格（按日期倒序）

    黄金按 10 克、白银按千克展示。
    """
    # 金银走势共用同一时间轴，按日期对齐
    now = now or utc_now()
    gold, silver = await asyncio.gather(
        get_history("XAU", currency, "1M", city, rng=rng, now=now),
        get_history("XAG", currency, "1M", city, rng=rng, now=now),
    )
    silver_by_date: Dict[datetime, float] = {point.date: point.price for point in silver}

    rows = []
    for point in reversed(gold[-days:]):
        silver_price = silver_by_date.get(point.date, 0.0)
        rows.append(ClosingRate(
            date=point.date,
            gold_per_10g=point.price * 10,
            silver_per_kg=silver_price * 1000,
        ))
    return rows


async def build_snapshot(
    metal: str,
    currency: str,
    city: str = DEFAULT_CITY,
    time_range: str = "1D",
    strategy: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> MetalSnapshot:
    """
    单个金属的看板数据

    并发获取实时报价、所选范围走势与用于均线判断的周线走势，
    日内走势的最后一个点替换为实时每克价格。
    """
    strategy = strategy or strategy_for_metal(metal)
    quote, history, weekly = await asyncio.gather(
        get_quote(metal, currency, city, rng=rng),
        get_history(metal, currency, time_range, city, rng=rng),
        get_history(metal, currency, "1W", city, rng=rng),
    )
    return MetalSnapshot(
        metal=metal,
        currency=currency,
        city=city,
        time_range=time_range,
        quote=quote,
        history=splice_live_price(history, quote.price_per_gram, time_range),
        trend=estimate_trend(metal, weekly, quote, strategy=strategy),
        strategy=strategy,
    )
