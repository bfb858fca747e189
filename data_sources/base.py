import asyncio
import time
from typing import Optional, Dict
import requests
from requests.exceptions import RequestException

from config import get_config
from utils.logger import logger


def make_request(
    url: str,
    method: str = "GET",
    headers: Optional[Dict] = None,
    params: Optional[Dict] = None,
    timeout: Optional[int] = None
) -> requests.Response:
    """
    发送 HTTP 请求，自动处理重试逻辑

    Args:
        url: 请求 URL
        method: 请求方法，仅支持 GET
        headers: 请求头
        params: URL 参数
        timeout: 超时时间 (秒)，如果不指定则使用配置中的默认值

    Returns:
        requests.Response: 响应对象

    Raises:
        ValueError: 请求方法不是 GET
        requests.RequestException: 如果所有重试都失败
    """
    config = get_config()
    network_config = config.get("network", {})

    retry_times = max(1, network_config.get("retry_times", 2))
    retry_interval = network_config.get("retry_interval", 1)
    default_timeout = network_config.get("timeout", 10)

    current_timeout = timeout if timeout is not None else default_timeout

    last_exception = None

    default_headers = {
        "User-Agent": "metal-rates/0.1",
        "Accept": "application/json",
    }
    if headers:
        default_headers.update(headers)

    if method.upper() != "GET":
        raise ValueError(f"不支持的方法: {method}")

    for attempt in range(1, retry_times + 1):
        try:
            return requests.get(url, headers=default_headers, params=params, timeout=current_timeout)

        except RequestException as e:
            last_exception = e
            logger.warning(f"请求失败 ({attempt}/{retry_times}): {url} - {str(e)}")

            if attempt < retry_times:
                time.sleep(retry_interval)

    # 所有重试都失败
    if last_exception:
        raise last_exception
    raise RequestException(f"请求失败，重试 {retry_times} 次")


async def make_request_async(url: str, **kwargs) -> requests.Response:
    """
    make_request 的异步版本

    在线程池中执行阻塞请求，不阻塞事件循环。参数同 make_request。
    """
    return await asyncio.to_thread(make_request, url, **kwargs)
