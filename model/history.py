"""
历史走势数据模型
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass(frozen=True)
class HistoryPoint:
    """历史走势中的单个点，价格单位为 货币/克"""
    date: datetime
    price: float

    def to_dict(self, intraday: bool = False) -> Dict[str, Any]:
        """
        序列化为字典

        日内走势保留完整 ISO 时间，日线只保留日期 (YYYY-MM-DD)
        """
        label = self.date.isoformat() if intraday else self.date.date().isoformat()
        return {"date": label, "price": self.price}


def utc_now() -> datetime:
    """当前 UTC 时间（带时区），走势时间轴统一使用"""
    return datetime.now(timezone.utc)


def history_to_dicts(points: List[HistoryPoint], time_range: str) -> List[Dict[str, Any]]:
    """按时间范围序列化整条走势"""
    intraday = time_range == "1D"
    return [point.to_dict(intraday=intraday) for point in points]
