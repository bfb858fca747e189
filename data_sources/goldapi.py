"""
GoldAPI 实时行情采集器
通过 GoldAPI.io 获取金属现货价（货币/盎司）
"""
from typing import Dict, Any

from config import get_config
from data_sources.base import make_request_async


async def fetch_live_rate(metal: str, currency: str, api_key: str) -> Dict[str, Any]:
    """
    获取实时报价

    Args:
        metal: 金属代码 (XAU/XAG)
        currency: 货币代码 (USD/INR/...)
        api_key: GoldAPI 访问令牌

    Returns:
        {
            "success": True/False,
            "symbol": "XAU/USD",
            "data": dict (原始 JSON) 或 None,
            "error": 错误信息 或 None
        }
    """
    config = get_config()
    base_url = config["data_sources"]["goldapi"]["base_url"].rstrip("/")
    symbol = f"{metal}/{currency}"

    # GoldAPI 格式: /XAU/USD 获取最新数据
    url = f"{base_url}/{metal}/{currency}"

    headers = {
        "x-access-token": api_key,
        "Content-Type": "application/json"
    }

    try:
        response = await make_request_async(url, headers=headers)

        if 200 <= response.status_code < 300:
            try:
                data = response.json()
            except ValueError as e:
                return {
                    "success": False,
                    "symbol": symbol,
                    "data": None,
                    "error": f"返回数据不是合法 JSON: {e}"
                }
            return {
                "success": True,
                "symbol": symbol,
                "data": data,
                "error": None
            }

        elif response.status_code in (401, 403):
            error = "API Key 无效或已过期"

        elif response.status_code == 404:
            error = f"未找到 {symbol} 的行情数据"

        elif response.status_code == 429:
            error = "API 请求次数超限"

        else:
            error = f"HTTP {response.status_code}: {response.text[:200]}"

        return {
            "success": False,
            "symbol": symbol,
            "data": None,
            "error": error
        }

    except Exception as e:
        return {
            "success": False,
            "symbol": symbol,
            "data": None,
            "error": f"请求异常: {str(e)}"
        }


if __name__ == "__main__":
    # 测试代码
    import asyncio
    from config import get_api_key

    result = asyncio.run(fetch_live_rate("XAU", "USD", get_api_key()))
    print(f"GoldAPI 采集结果: {result}")
