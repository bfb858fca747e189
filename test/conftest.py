import random
from datetime import datetime

import pytest

from config import reset_config, API_KEY_ENV


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """每个用例使用默认配置，且不带 API Key"""
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.setenv("METAL_RATES_CONFIG", str(tmp_path / "missing.yaml"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def write_config(monkeypatch, tmp_path):
    """写入临时配置文件并生效"""
    def _write(text: str):
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv("METAL_RATES_CONFIG", str(path))
        reset_config()
        return path
    return _write


@pytest.fixture
def rng():
    return random.Random(20260101)


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 15, 12, 0, 0)


@pytest.fixture
def goldapi_payload():
    """GoldAPI 返回样例"""
    return {
        "timestamp": 1767225600,
        "metal": "XAU",
        "currency": "USD",
        "exchange": "FOREXCOM",
        "symbol": "FOREXCOM:XAUUSD",
        "prev_close_price": 4885.0,
        "open_price": 4890.0,
        "low_price": 4880.0,
        "high_price": 4930.0,
        "open_time": 1767139200,
        "price": 4920.5,
        "ch": 35.5,
        "chp": 0.73,
        "ask": 4921.0,
        "bid": 4920.0,
        "price_gram_24k": 158.1976,
        "price_gram_22k": 145.0123,
        "price_gram_21k": 138.4229,
        "price_gram_20k": 131.8335,
        "price_gram_18k": 118.6482,
        "price_gram_16k": 105.4650,
        "price_gram_14k": 92.2818,
        "price_gram_10k": 65.9156,
    }
