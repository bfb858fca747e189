"""
行情数据校验器
校验 GoldAPI 返回数据并换算各成色每克价格
"""
import math
import time
from typing import Any, Dict, Optional, Tuple

from model import Quote, TROY_OUNCE_TO_GRAM, PURITY_MULTIPLIERS


# 可选数值字段（缺失时由现货价推导）
OPTIONAL_PRICE_FIELDS = (
    "prev_close_price", "open_price", "high_price", "low_price", "bid", "ask",
)


class PayloadError(ValueError):
    """上游返回数据格式不符"""


# ======================
# 计算函数
# ======================
def calculate_gram_prices(price: float) -> Dict[str, float]:
    """
    按成色换算每克价格

    公式: (现货价 / 31.1035) × 成色系数
    """
    per_gram = price / TROY_OUNCE_TO_GRAM
    return {purity: per_gram * multiplier for purity, multiplier in PURITY_MULTIPLIERS.items()}


def check_purity_order(quote: Quote) -> Tuple[bool, str]:
    """
    成色价格单调性校验：24k ≥ 22k ≥ ... ≥ 10k

    Returns:
        (is_valid, note)
    """
    prices = list(quote.gram_prices().items())
    for (high_name, high), (low_name, low) in zip(prices, prices[1:]):
        if high < low:
            return False, f"{high_name}={high:.4f} 低于 {low_name}={low:.4f}"
    return True, "成色价格单调递减"


# ======================
# 上游数据解析
# ======================
def parse_live_payload(
    data: Any,
    metal: str,
    currency: str,
    city: str,
) -> Quote:
    """
    将 GoldAPI 返回的 JSON 转换为 Quote

    GoldAPI 返回格式：
    {
      "timestamp": 1234567890,
      "metal": "XAU",
      "currency": "USD",
      "price": 1950.50,
      "prev_close_price": 1948.00,
      "ch": 2.5, "chp": 0.13,
      "price_gram_24k": 62.71,
      ...
    }

    Raises:
        PayloadError: 数据格式不符（缺少 price、字段类型错误、金属/货币不匹配、成色价格不单调）
    """
    if not isinstance(data, dict):
        raise PayloadError(f"返回数据不是 JSON 对象: {type(data).__name__}")

    price = _number(data, "price")
    if price is None:
        raise PayloadError("API 返回数据中无 price 字段")
    if price <= 0:
        raise PayloadError(f"price 必须为正数: {price}")

    for key, expected in (("metal", metal), ("currency", currency)):
        actual = data.get(key)
        if actual is not None and actual != expected:
            raise PayloadError(f"{key} 不匹配: 请求 {expected}, 返回 {actual}")

    fields = {key: _number(data, key) for key in OPTIONAL_PRICE_FIELDS}
    prev_close = fields["prev_close_price"] if fields["prev_close_price"] is not None else price

    ch = _number(data, "ch")
    if ch is None:
        ch = price - prev_close
    chp = _number(data, "chp")
    if chp is None:
        chp = ch / prev_close * 100 if prev_close else 0.0

    derived = calculate_gram_prices(price)
    gram_prices = {}
    for purity, value in derived.items():
        reported = _number(data, f"price_gram_{purity}")
        gram_prices[f"price_gram_{purity}"] = reported if reported is not None else value

    timestamp = _number(data, "timestamp")
    exchange = data.get("exchange")

    quote = Quote(
        metal=metal,
        currency=currency,
        city=city,
        symbol=f"{metal}/{currency}",
        timestamp=timestamp if timestamp is not None else time.time(),
        price=price,
        prev_close_price=prev_close,
        open_price=_or(fields["open_price"], prev_close),
        high_price=_or(fields["high_price"], max(prev_close, price)),
        low_price=_or(fields["low_price"], min(prev_close, price)),
        bid=_or(fields["bid"], price),
        ask=_or(fields["ask"], price),
        ch=ch,
        chp=chp,
        source="live",
        exchange=exchange if isinstance(exchange, str) else None,
        **gram_prices,
    )

    is_valid, note = check_purity_order(quote)
    if not is_valid:
        raise PayloadError(f"成色价格不单调: {note}")
    return quote


def _number(data: Dict[str, Any], key: str) -> Optional[float]:
    """读取数值字段，缺失返回 None，类型错误抛出 PayloadError"""
    value = data.get(key)
    if value is None:
        return None
    # bool 是 int 的子类，需单独排除
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"字段 {key} 类型错误: {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise PayloadError(f"字段 {key} 非有限数值: {value!r}")
    return value


def _or(value: Optional[float], default: float) -> float:
    return default if value is None else value
