import logging

import pytest

from config import API_KEY_ENV
from core.rate_provider import get_quote, get_history


@pytest.fixture
def mock_fetch(mocker):
    """Mock GoldAPI 请求"""
    return mocker.patch("core.rate_provider.fetch_live_rate", new_callable=mocker.AsyncMock)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "test_key")
    return "test_key"


async def test_missing_key_uses_mock(mock_fetch, caplog):
    """未配置 API Key 时不请求接口，直接返回模拟报价"""
    with caplog.at_level(logging.WARNING, logger="metal_rates"):
        quote = await get_quote("XAU", "INR", "Mumbai")

    mock_fetch.assert_not_called()
    assert quote.source == "mock"
    assert quote.symbol == "XAU/INR"
    assert quote.city == "Mumbai"
    assert "未配置 API Key" in caplog.text


async def test_missing_key_never_raises_for_any_combination():
    from model import SUPPORTED_METALS, SUPPORTED_CURRENCIES, SUPPORTED_CITIES

    for metal in SUPPORTED_METALS:
        for currency in SUPPORTED_CURRENCIES:
            for city in SUPPORTED_CITIES:
                quote = await get_quote(metal, currency, city)
                assert quote.symbol == f"{metal}/{currency}"
                assert quote.price > 0


async def test_live_quote(api_key, mock_fetch, goldapi_payload):
    """测试实时报价"""
    mock_fetch.return_value = {"success": True, "symbol": "XAU/USD", "data": goldapi_payload, "error": None}

    quote = await get_quote("XAU", "USD", "Delhi")

    mock_fetch.assert_awaited_once_with("XAU", "USD", "test_key")
    assert quote.source == "live"
    assert quote.price == 4920.5
    assert quote.city == "Delhi"


async def test_live_failure_falls_back(api_key, mock_fetch, caplog):
    """接口失败时降级为模拟数据"""
    mock_fetch.return_value = {"success": False, "symbol": "XAU/USD", "data": None, "error": "API 请求次数超限"}

    with caplog.at_level(logging.ERROR, logger="metal_rates"):
        quote = await get_quote("XAU", "USD")

    assert quote.source == "mock"
    assert quote.symbol == "XAU/USD"
    assert "API 请求次数超限" in caplog.text


async def test_malformed_payload_falls_back(api_key, mock_fetch, caplog):
    """返回数据格式不符时降级为模拟数据"""
    mock_fetch.return_value = {"success": True, "symbol": "XAG/EUR", "data": {"message": "oops"}, "error": None}

    with caplog.at_level(logging.ERROR, logger="metal_rates"):
        quote = await get_quote("XAG", "EUR")

    assert quote.source == "mock"
    assert quote.symbol == "XAG/EUR"
    assert "格式错误" in caplog.text


async def test_mismatched_payload_falls_back(api_key, mock_fetch, goldapi_payload):
    mock_fetch.return_value = {"success": True, "symbol": "XAU/GBP", "data": goldapi_payload, "error": None}

    quote = await get_quote("XAU", "GBP")

    assert quote.source == "mock"
    assert quote.currency == "GBP"


async def test_non_monotonic_purity_payload_falls_back(api_key, mock_fetch, goldapi_payload, caplog):
    """成色价格不单调时视为格式错误，降级为模拟数据"""
    goldapi_payload["price_gram_22k"] = 500.0
    mock_fetch.return_value = {"success": True, "symbol": "XAU/USD", "data": goldapi_payload, "error": None}

    with caplog.at_level(logging.ERROR, logger="metal_rates"):
        quote = await get_quote("XAU", "USD")

    assert quote.source == "mock"
    assert quote.price_gram_24k >= quote.price_gram_22k
    assert "成色价格不单调" in caplog.text


async def test_key_read_at_call_time(mock_fetch, monkeypatch, goldapi_payload):
    """API Key 每次调用时读取"""
    mock_fetch.return_value = {"success": True, "symbol": "XAU/USD", "data": goldapi_payload, "error": None}

    assert (await get_quote("XAU", "USD")).source == "mock"
    monkeypatch.setenv(API_KEY_ENV, "late_key")
    assert (await get_quote("XAU", "USD")).source == "live"


async def test_invalid_params_raise(mock_fetch):
    with pytest.raises(ValueError):
        await get_quote("XAU", "JPY")


async def test_history_is_synthetic_even_with_key(api_key, mock_fetch, rng, fixed_now):
    points = await get_history("XAU", "USD", "1W", rng=rng, now=fixed_now)

    mock_fetch.assert_not_called()
    assert len(points) == 8
    assert points[-1].date == fixed_now
