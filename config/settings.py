import os
import yaml
from pathlib import Path


# 配置文件默认路径（相对于项目根目录）
CONFIG_FILE = "config.yaml"
# API Key 环境变量名
API_KEY_ENV = "GOLD_API_KEY"

DEFAULT_CONFIG = {
    "data_sources": {
        "goldapi": {
            "base_url": "https://www.goldapi.io/api",
            "api_key": ""
        }
    },
    "network": {
        "retry_times": 2,
        "retry_interval": 1,
        "timeout": 10
    },
    "polling": {
        "quote_interval": 60,
        "city_table_interval": 300
    },
    "logging": {
        "level": "INFO"
    }
}


_config_cache = None


def get_config():
    """
    获取全局配置（单例模式，避免重复读取文件）

    配置文件是可选的：文件不存在时直接使用默认配置，
    未配置 API Key 时行情查询会自动切换到模拟数据。
    """
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    config_path = Path(os.getenv("METAL_RATES_CONFIG", CONFIG_FILE))

    if not config_path.exists():
        _config_cache = _deep_merge(DEFAULT_CONFIG, {})
        return _config_cache

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"配置文件格式错误 ({config_path}): {e}")
    except OSError as e:
        raise RuntimeError(f"加载配置失败: {e}")

    if not isinstance(user_config, dict):
        raise ValueError(f"配置文件格式错误 ({config_path}): 顶层必须是字典")

    # 合并默认配置与用户配置（用户配置优先）
    _config_cache = _deep_merge(DEFAULT_CONFIG, user_config)
    return _config_cache


def reset_config() -> None:
    """清空配置缓存（用于测试或重新加载配置文件）"""
    global _config_cache
    _config_cache = None


def get_api_key() -> str:
    """
    读取 GoldAPI 的 API Key

    每次调用时实时读取，环境变量优先于配置文件。
    未配置时返回空字符串。
    """
    env_key = os.getenv(API_KEY_ENV, "").strip()
    if env_key:
        return env_key
    api_config = get_config()["data_sources"]["goldapi"]
    return (api_config.get("api_key") or "").strip()


def _deep_merge(default, override):
    """
    递归合并两个字典(override 覆盖 default)
    """
    # 若 override 为 None 或非字典，保留 default
    if override is None:
        return default
    if not isinstance(default, dict) or not isinstance(override, dict):
        return override
    result = default.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
