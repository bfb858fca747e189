"""
模拟行情生成器
未配置 API Key 或接口不可用时，基于静态基准价生成报价
"""
import random
import time
from typing import Optional

from model import Quote, CITY_VARIANCE, CURRENCY_FACTORS, MOCK_BASES, check_params
from model.market import MOCK_JITTER, MOCK_SPREAD
from validator import calculate_gram_prices


def draw_jitter(rng: Optional[random.Random] = None) -> float:
    """随机扰动，均匀分布于 [-0.05%, +0.05%]"""
    rng = rng or random
    return rng.uniform(-MOCK_JITTER, MOCK_JITTER)


def build_mock_quote(
    metal: str,
    currency: str,
    city: str = "National",
    rng: Optional[random.Random] = None,
    jitter: Optional[float] = None,
    timestamp: Optional[float] = None,
) -> Quote:
    """
    生成模拟报价

    现货价 = 基准价 × (1 + 城市溢价 + 随机扰动) × 汇率系数

    Args:
        metal: 金属代码
        currency: 货币代码
        city: 城市
        rng: 随机数发生器（测试时传入固定种子）
        jitter: 指定扰动值，为 None 时随机抽取
        timestamp: 报价时间，默认为当前时间
    """
    check_params(metal, currency, city)

    base = MOCK_BASES[metal]
    variance = CITY_VARIANCE[city]
    factor = CURRENCY_FACTORS[currency]
    if jitter is None:
        jitter = draw_jitter(rng)

    price = base["price"] * (1 + variance + jitter) * factor
    prev_close = base["prev_close_price"] * (1 + variance) * factor
    ch = price - prev_close
    half_spread = price * MOCK_SPREAD / 2

    gram_prices = {
        f"price_gram_{purity}": value
        for purity, value in calculate_gram_prices(price).items()
    }

    return Quote(
        metal=metal,
        currency=currency,
        city=city,
        symbol=f"{metal}/{currency}",
        timestamp=timestamp if timestamp is not None else time.time(),
        price=price,
        prev_close_price=prev_close,
        open_price=prev_close,
        high_price=max(prev_close, price),
        low_price=min(prev_close, price),
        bid=price - half_spread,
        ask=price + half_spread,
        ch=ch,
        chp=ch / prev_close * 100,
        source="mock",
        **gram_prices,
    )
