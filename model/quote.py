"""
行情数据模型
单次查询得到的金属报价（不可变，每次查询重新生成）
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Quote:
    """金属实时报价，字段与 GoldAPI 返回格式保持一致"""
    metal: str                  # XAU / XAG
    currency: str               # USD, INR, ...
    city: str                   # 城市，National 表示全国均价
    symbol: str                 # "{metal}/{currency}"
    timestamp: float            # Unix 时间戳（秒）
    price: float                # 现货价（货币/盎司）
    prev_close_price: float
    open_price: float
    high_price: float
    low_price: float
    bid: float
    ask: float
    ch: float                   # 涨跌额
    chp: float                  # 涨跌幅（%）
    price_gram_24k: float
    price_gram_22k: float
    price_gram_21k: float
    price_gram_20k: float
    price_gram_18k: float
    price_gram_16k: float
    price_gram_14k: float
    price_gram_10k: float
    source: str = "mock"        # live: 实时接口, mock: 模拟数据
    exchange: Optional[str] = None

    @property
    def price_per_gram(self) -> float:
        """纯金属每克价格（与历史走势同单位）"""
        return self.price_gram_24k

    def gram_prices(self) -> Dict[str, float]:
        """按成色从高到低返回每克价格"""
        return {
            "24k": self.price_gram_24k,
            "22k": self.price_gram_22k,
            "21k": self.price_gram_21k,
            "20k": self.price_gram_20k,
            "18k": self.price_gram_18k,
            "16k": self.price_gram_16k,
            "14k": self.price_gram_14k,
            "10k": self.price_gram_10k,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
