"""
定时刷新
按固定间隔刷新实时报价与城市对比表，结果写入按键区分的缓存
"""
import asyncio
import itertools
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Hashable, Optional, Sequence, Tuple

from config import get_config
from core.dashboard import build_city_rates
from core.rate_provider import get_quote
from model import DEFAULT_CITY, SUPPORTED_METALS, check_params
from utils.logger import logger


# 缓存更新回调签名: (key, value) -> None
UpdateListener = Callable[[Hashable, Any], None]


@dataclass(frozen=True)
class CacheEntry:
    generation: int
    value: Any
    updated_at: datetime


class RateCache:
    """
    按键缓存刷新结果

    每次刷新前领取递增的代号，写入时若已有更新代号的结果则丢弃，
    保证晚返回的旧请求不会覆盖新数据。
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._entries: Dict[Hashable, CacheEntry] = {}

    def next_generation(self) -> int:
        return next(self._counter)

    def put(self, key: Hashable, generation: int, value: Any) -> bool:
        """写入结果，返回是否生效"""
        current = self._entries.get(key)
        if current is not None and current.generation > generation:
            logger.debug(f"丢弃过期结果: {key} (代号 {generation} < {current.generation})")
            return False
        self._entries[key] = CacheEntry(generation, value, datetime.now())
        return True

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def entry(self, key: Hashable) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def keys(self):
        return list(self._entries)


class RatePoller:
    """
    行情定时刷新器

    - 实时报价：默认每 60 秒刷新一次
    - 城市对比表：默认每 5 分钟刷新一次

    stop() 或取消任务即停止刷新。
    """

    def __init__(
        self,
        currency: str,
        city: str = DEFAULT_CITY,
        metals: Sequence[str] = SUPPORTED_METALS,
        quote_interval: Optional[float] = None,
        city_table_interval: Optional[float] = None,
        listener: Optional[UpdateListener] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        for metal in metals:
            check_params(metal, currency, city)

        polling = get_config()["polling"]
        self.currency = currency
        self.city = city
        self.metals = tuple(metals)
        self.quote_interval = quote_interval if quote_interval is not None else polling["quote_interval"]
        self.city_table_interval = (
            city_table_interval if city_table_interval is not None else polling["city_table_interval"]
        )
        self.listener = listener
        self.rng = rng
        self.cache = RateCache()
        self._task: Optional[asyncio.Task] = None

    # ======================
    # 缓存键
    # ======================
    @staticmethod
    def quote_key(metal: str, currency: str, city: str) -> Tuple[str, str, str, str]:
        return ("quote", metal, currency, city)

    @staticmethod
    def city_table_key(currency: str) -> Tuple[str, str]:
        return ("city_rates", currency)

    def select(self, currency: Optional[str] = None, city: Optional[str] = None) -> None:
        """切换货币/城市，下一轮刷新生效"""
        currency = currency or self.currency
        city = city or self.city
        for metal in self.metals:
            check_params(metal, currency, city)
        self.currency, self.city = currency, city

    # ======================
    # 单次刷新
    # ======================
    async def refresh_quotes(self) -> None:
        """并发刷新所有金属的实时报价"""
        currency, city = self.currency, self.city
        generation = self.cache.next_generation()
        quotes = await asyncio.gather(
            *(get_quote(metal, currency, city, rng=self.rng) for metal in self.metals)
        )
        for quote in quotes:
            self._store(self.quote_key(quote.metal, currency, city), generation, quote)

    async def refresh_city_table(self) -> None:
        """刷新城市对比表"""
        currency = self.currency
        generation = self.cache.next_generation()
        rows = await build_city_rates(currency, rng=self.rng)
        self._store(self.city_table_key(currency), generation, rows)

    def _store(self, key: Hashable, generation: int, value: Any) -> None:
        if not self.cache.put(key, generation, value):
            return
        if self.listener is None:
            return
        try:
            self.listener(key, value)
        except Exception as e:
            # 回调失败只打印警告，不中断刷新
            logger.warning(f"缓存更新回调执行失败: {e}")

    # ======================
    # 刷新循环
    # ======================
    async def _poll(self, name: str, refresh: Callable, interval: float) -> None:
        try:
            while True:
                try:
                    await refresh()
                except Exception as e:
                    logger.error(f"{name} 刷新失败: {e}", exc_info=True)
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info(f"{name} 刷新已停止")
            raise

    async def run(self) -> None:
        """运行刷新循环，直到被取消"""
        logger.info(
            f"开始定时刷新: {self.currency} ({self.city}), "
            f"报价间隔 {self.quote_interval}s, 城市表间隔 {self.city_table_interval}s"
        )
        async with asyncio.TaskGroup() as tg:
            tg.create_task(self._poll("实时报价", self.refresh_quotes, self.quote_interval))
            tg.create_task(self._poll("城市对比表", self.refresh_city_table, self.city_table_interval))

    def start(self) -> asyncio.Task:
        """在当前事件循环中后台启动"""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """停止刷新并等待任务退出"""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
