import pytest
from unittest.mock import MagicMock
from requests.exceptions import ConnectionError as RequestsConnectionError

from data_sources.base import make_request, make_request_async


@pytest.fixture
def fast_retry(write_config):
    write_config("network:\n  retry_times: 2\n  retry_interval: 0\n  timeout: 3\n")


def test_make_request_returns_response(fast_retry, mocker):
    """测试请求成功直接返回响应（非 2xx 不重试）"""
    response = MagicMock(status_code=500)
    mock_get = mocker.patch("data_sources.base.requests.get", return_value=response)

    result = make_request("https://test.api/XAU/USD", headers={"x-access-token": "k"})

    assert result is response
    mock_get.assert_called_once()
    _, kwargs = mock_get.call_args
    assert kwargs["timeout"] == 3
    assert kwargs["headers"]["x-access-token"] == "k"
    assert "User-Agent" in kwargs["headers"]


def test_make_request_retries_then_raises(fast_retry, mocker):
    """测试网络异常重试后抛出"""
    mock_get = mocker.patch(
        "data_sources.base.requests.get",
        side_effect=RequestsConnectionError("refused"),
    )

    with pytest.raises(RequestsConnectionError):
        make_request("https://test.api/XAU/USD")

    assert mock_get.call_count == 2


def test_make_request_recovers_on_retry(fast_retry, mocker):
    """测试第二次重试成功"""
    response = MagicMock(status_code=200)
    mock_get = mocker.patch(
        "data_sources.base.requests.get",
        side_effect=[RequestsConnectionError("reset"), response],
    )

    assert make_request("https://test.api/XAU/USD") is response
    assert mock_get.call_count == 2


@pytest.mark.parametrize("method", ["POST", "DELETE"])
def test_make_request_only_supports_get(fast_retry, mocker, method):
    """测试仅支持 GET，其他方法不发请求直接报错"""
    mock_get = mocker.patch("data_sources.base.requests.get")

    with pytest.raises(ValueError):
        make_request("https://test.api", method=method)

    mock_get.assert_not_called()


async def test_make_request_async_runs_in_thread(fast_retry, mocker):
    """测试异步版本透传参数"""
    response = MagicMock(status_code=200)
    mock_get = mocker.patch("data_sources.base.requests.get", return_value=response)

    result = await make_request_async("https://test.api/XAG/EUR", headers={"x-access-token": "k"})

    assert result is response
    args, kwargs = mock_get.call_args
    assert args[0] == "https://test.api/XAG/EUR"
    assert kwargs["headers"]["x-access-token"] == "k"
