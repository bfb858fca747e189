import pytest
from dataclasses import replace

from data_sources.mock_rates import build_mock_quote
from validator import parse_live_payload, calculate_gram_prices, check_purity_order, PayloadError


def test_calculate_gram_prices():
    prices = calculate_gram_prices(311.035)
    assert prices["24k"] == pytest.approx(10.0)
    assert prices["22k"] == pytest.approx(9.16)
    assert prices["21k"] == pytest.approx(8.75)
    assert prices["20k"] == pytest.approx(8.33)
    assert prices["18k"] == pytest.approx(7.5)
    assert prices["16k"] == pytest.approx(6.67)
    assert prices["14k"] == pytest.approx(5.83)
    assert prices["10k"] == pytest.approx(4.17)


def test_parse_full_payload(goldapi_payload):
    """测试完整返回数据直接转换"""
    quote = parse_live_payload(goldapi_payload, "XAU", "USD", "Mumbai")

    assert quote.source == "live"
    assert quote.symbol == "XAU/USD"
    assert quote.city == "Mumbai"
    assert quote.price == 4920.5
    assert quote.ch == 35.5
    assert quote.chp == 0.73
    assert quote.bid == 4920.0
    assert quote.ask == 4921.0
    assert quote.price_gram_24k == 158.1976
    assert quote.exchange == "FOREXCOM"
    assert quote.timestamp == 1767225600


def test_parse_minimal_payload_derives_fields():
    """测试仅含 price 时推导其余字段"""
    quote = parse_live_payload({"price": 82.2, "prev_close_price": 81.35}, "XAG", "USD", "National")

    assert quote.price_gram_24k == pytest.approx(82.2 / 31.1035)
    assert quote.ch == pytest.approx(0.85)
    assert quote.chp == pytest.approx(0.85 / 81.35 * 100)
    assert quote.high_price == 82.2
    assert quote.low_price == 81.35
    assert quote.bid == quote.ask == 82.2
    assert check_purity_order(quote)[0] is True


@pytest.mark.parametrize("payload, message", [
    ({"error": "no data"}, "无 price 字段"),
    ({"price": "4920.5"}, "类型错误"),
    ({"price": True}, "类型错误"),
    ({"price": 0}, "正数"),
    ({"price": float("nan")}, "有限"),
    ({"price": 4920.5, "metal": "XAG"}, "metal 不匹配"),
    ({"price": 4920.5, "currency": "EUR"}, "currency 不匹配"),
    ({"price": 4920.5, "bid": [1]}, "bid"),
    ({"price": 4920.5, "price_gram_10k": 400.0}, "成色价格不单调"),
])
def test_parse_rejects_malformed_payload(payload, message):
    with pytest.raises(PayloadError) as exc_info:
        parse_live_payload(payload, "XAU", "USD", "National")
    assert message in str(exc_info.value)


@pytest.mark.parametrize("payload", [None, [], "error"])
def test_parse_rejects_non_object(payload):
    with pytest.raises(PayloadError):
        parse_live_payload(payload, "XAU", "USD", "National")


def test_check_purity_order_detects_violation():
    quote = build_mock_quote("XAU", "USD", jitter=0.0)
    broken = replace(quote, price_gram_18k=quote.price_gram_22k + 1)

    is_valid, note = check_purity_order(broken)

    assert is_valid is False
    assert "20k" in note and "18k" in note
