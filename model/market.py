"""
行情静态参数表
金属、货币、城市、时间范围等枚举值，以及模拟行情使用的基准数据
"""
from datetime import timedelta
from typing import Dict, Tuple


# ======================
# 换算常量
# ======================
TROY_OUNCE_TO_GRAM = 31.1035  # 金衡盎司转克

# 各成色相对 24k 的系数（按成色从高到低排列）
PURITY_MULTIPLIERS: Dict[str, float] = {
    "24k": 1.0,
    "22k": 0.916,
    "21k": 0.875,
    "20k": 0.833,
    "18k": 0.75,
    "16k": 0.667,
    "14k": 0.583,
    "10k": 0.417,
}


# ======================
# 枚举值
# ======================
SUPPORTED_METALS: Tuple[str, ...] = ("XAU", "XAG")
SUPPORTED_CURRENCIES: Tuple[str, ...] = ("USD", "EUR", "GBP", "INR", "AUD", "CAD")
SUPPORTED_CITIES: Tuple[str, ...] = (
    "National", "Mumbai", "Delhi", "Bangalore", "Chennai", "Kolkata",
    "Hyderabad", "Ahmedabad", "Pune", "Jaipur", "Lucknow", "Chandigarh", "Nagpur",
)
SUPPORTED_RANGES: Tuple[str, ...] = ("1D", "1W", "1M")

DEFAULT_CITY = "National"


# ======================
# 模拟行情参数
# ======================
# 城市溢价/折价（相对全国均价）
CITY_VARIANCE: Dict[str, float] = {
    "National": 0.0,
    "Mumbai": 0.002,       # 交易中心
    "Delhi": 0.003,
    "Chennai": 0.005,      # 需求旺盛
    "Kolkata": 0.004,
    "Bangalore": 0.001,
    "Hyderabad": 0.0015,
    "Ahmedabad": -0.001,
    "Pune": 0.001,
    "Jaipur": 0.002,
    "Lucknow": 0.0025,
    "Chandigarh": 0.003,
    "Nagpur": 0.0015,
}

# 静态汇率系数（1 美元兑换的目标货币）
CURRENCY_FACTORS: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.90,
    "GBP": 0.76,
    "INR": 96.50,  # 含进口溢价
    "AUD": 1.45,
    "CAD": 1.32,
}

# 模拟基准价（美元/盎司）
MOCK_BASES: Dict[str, Dict[str, float]] = {
    "XAU": {"price": 4920.50, "prev_close_price": 4885.00},
    "XAG": {"price": 82.20, "prev_close_price": 81.35},
}

MOCK_JITTER = 0.0005        # 实时扰动幅度 ±0.05%
MOCK_SPREAD = 0.0002        # 模拟买卖价差 0.02%

# 历史走势：时间范围 -> (步长, 步数, 单步随机幅度)
RANGE_STEPS: Dict[str, Tuple[timedelta, int, float]] = {
    "1D": (timedelta(minutes=30), 48, 2.5),
    "1W": (timedelta(days=1), 7, 10.0),
    "1M": (timedelta(days=1), 30, 10.0),
}


def check_params(metal: str, currency: str, city: str = DEFAULT_CITY) -> None:
    """
    校验行情参数

    Raises:
        ValueError: 参数不在支持范围内
    """
    if metal not in SUPPORTED_METALS:
        raise ValueError(f"不支持的金属: {metal}")
    if currency not in SUPPORTED_CURRENCIES:
        raise ValueError(f"不支持的货币: {currency}")
    if city not in CITY_VARIANCE:
        raise ValueError(f"不支持的城市: {city}")
