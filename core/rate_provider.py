"""
行情服务
对外提供实时报价与历史走势，实时接口不可用时自动降级为模拟数据
"""
import random
from datetime import datetime
from typing import List, Optional

from config import get_api_key
from data_sources import fetch_live_rate, build_mock_quote, generate_mock_history
from model import Quote, HistoryPoint, DEFAULT_CITY, check_params
from validator import parse_live_payload, PayloadError
from utils.logger import logger


async def get_quote(
    metal: str,
    currency: str,
    city: str = DEFAULT_CITY,
    rng: Optional[random.Random] = None,
) -> Quote:
    """
    获取实时报价

    流程:
    1. 未配置 API Key -> 直接返回模拟报价
    2. 请求 GoldAPI，网络异常 / 非 2xx / 数据格式不符 -> 记录日志后返回模拟报价
    3. 成功 -> 返回实时报价（实时接口不区分城市，仅回显城市字段）

    Args:
        metal: 金属代码 (XAU/XAG)
        currency: 货币代码
        city: 城市，默认全国
        rng: 模拟报价使用的随机数发生器

    Returns:
        Quote: 报价（实时或模拟）

    Raises:
        ValueError: 参数不在支持范围内
    """
    check_params(metal, currency, city)

    api_key = get_api_key()
    if not api_key:
        logger.warning(f"未配置 API Key，使用模拟数据: {metal}/{currency} ({city})")
        return build_mock_quote(metal, currency, city, rng=rng)

    result = await fetch_live_rate(metal, currency, api_key)
    if not result["success"]:
        logger.error(f"实时行情获取失败，使用模拟数据: {result['error']}")
        return build_mock_quote(metal, currency, city, rng=rng)

    try:
        return parse_live_payload(result["data"], metal, currency, city)
    except PayloadError as e:
        logger.error(f"实时行情数据格式错误，使用模拟数据: {e}")
        return build_mock_quote(metal, currency, city, rng=rng)


async def get_history(
    metal: str,
    currency: str,
    time_range: str,
    city: str = DEFAULT_CITY,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[HistoryPoint]:
    """
    获取历史走势（货币/克，按时间升序）

    暂无可用的历史行情接口，无论是否配置 API Key 均返回模拟走势，
    每次调用独立生成。

    Raises:
        ValueError: 参数不在支持范围内
    """
    return generate_mock_history(metal, currency, time_range, city, rng=rng, now=now)
