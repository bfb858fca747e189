"""
任务调度器
封装查询任务，支持后置处理器扩展
"""
from typing import Callable, List, Optional, Sequence
from datetime import datetime
from dataclasses import dataclass

from model import DEFAULT_CITY, SUPPORTED_METALS, history_to_dicts
from core.dashboard import MetalSnapshot, build_snapshot, build_city_rates, build_closing_rates
from core.rate_provider import get_history
from utils.logger import logger


# ======================
# 类型定义
# ======================
# 后置处理器函数签名: (snapshot: MetalSnapshot) -> None
PostProcessor = Callable[[MetalSnapshot], None]

TASK_TYPES = ("quote", "history", "cities", "closing", "all")

METAL_NAMES = {"XAU": "黄金", "XAG": "白银"}
TREND_LABELS = {"up": "看涨", "down": "看跌", "neutral": "中性"}


@dataclass
class TaskResult:
    """任务执行结果"""
    success: bool
    task_type: str
    message: str
    started_at: datetime
    finished_at: datetime
    details: Optional[dict] = None


@dataclass
class TaskOptions:
    """任务参数"""
    currency: str = "INR"
    city: str = DEFAULT_CITY
    time_range: str = "1D"
    metals: Sequence[str] = SUPPORTED_METALS
    strategy: Optional[str] = None


# ======================
# 后置处理器注册表
# ======================
_post_processors: List[PostProcessor] = []


def register_processor(processor: PostProcessor) -> None:
    """注册后置处理器"""
    if processor not in _post_processors:
        _post_processors.append(processor)


def unregister_processor(processor: PostProcessor) -> None:
    """注销后置处理器"""
    if processor in _post_processors:
        _post_processors.remove(processor)


def clear_processors() -> None:
    """清空所有后置处理器"""
    _post_processors.clear()


# ======================
# 内置后置处理器
# ======================
def log_result_processor(snapshot: MetalSnapshot) -> None:
    """
    日志记录处理器
    记录报价来源与趋势
    """
    quote = snapshot.quote
    logger.info(
        f"报价: {quote.symbol} ({quote.city}) = {quote.price:.2f}, "
        f"来源: {quote.source}, 趋势: {snapshot.trend} [{snapshot.strategy}]"
    )


def summary_printer_processor(snapshot: MetalSnapshot) -> None:
    """
    数据摘要打印处理器
    打印报价与各成色每克价格
    """
    quote = snapshot.quote
    name = METAL_NAMES.get(quote.metal, quote.metal)
    print(f"\n📊 {name} {quote.symbol} ({quote.city})")
    print("=" * 40)
    print(f"  现货价:     {quote.price:,.2f} {quote.currency}/盎司")
    print(f"  涨跌:       {quote.ch:+,.2f} ({quote.chp:+.2f}%)")
    print(f"  买入/卖出:  {quote.bid:,.2f} / {quote.ask:,.2f}")
    print(f"  最高/最低:  {quote.high_price:,.2f} / {quote.low_price:,.2f}")
    if quote.metal == "XAU":
        for purity, price in quote.gram_prices().items():
            print(f"  {purity:<4}每克:   {price:,.2f}")
    else:
        print(f"  每克:       {quote.price_per_gram:,.4f}")
    print(f"  趋势:       {TREND_LABELS.get(snapshot.trend, snapshot.trend)}")
    print(f"  数据来源:   {'实时' if quote.source == 'live' else '模拟'}")
    print("=" * 40)


# ======================
# 后置处理器执行
# ======================
def _run_post_processors(snapshot: MetalSnapshot) -> None:
    """
    执行所有已注册的后置处理器
    单个处理器失败不影响其他处理器
    """
    for processor in _post_processors:
        try:
            processor(snapshot)
        except Exception as e:
            # 处理器失败只打印警告，不中断流程
            logger.warning(f"后置处理器 {processor.__name__} 执行失败: {e}")


# ======================
# 任务执行函数
# ======================
async def run_quote_task(options: TaskOptions) -> TaskResult:
    """
    查询实时报价与趋势

    Returns:
        TaskResult: 任务执行结果
    """
    started_at = datetime.now()

    try:
        details = {}
        for metal in options.metals:
            snapshot = await build_snapshot(
                metal, options.currency, options.city, options.time_range, strategy=options.strategy
            )
            _run_post_processors(snapshot)
            details[metal] = {
                "price": snapshot.quote.price,
                "price_gram_24k": snapshot.quote.price_gram_24k,
                "source": snapshot.quote.source,
                "trend": snapshot.trend,
            }

        sources = {item["source"] for item in details.values()}
        return TaskResult(
            success=True,
            task_type="quote",
            message=f"报价查询完成: {options.currency} ({options.city}), 来源: {', '.join(sorted(sources))}",
            started_at=started_at,
            finished_at=datetime.now(),
            details=details,
        )

    except Exception as e:
        logger.error(f"报价查询异常: {e}", exc_info=True)
        return TaskResult(
            success=False,
            task_type="quote",
            message=f"任务异常: {str(e)}",
            started_at=started_at,
            finished_at=datetime.now(),
            details={"exception": str(e)}
        )


async def run_history_task(options: TaskOptions) -> TaskResult:
    """查询历史走势"""
    started_at = datetime.now()

    try:
        details = {}
        for metal in options.metals:
            points = await get_history(metal, options.currency, options.time_range, options.city)
            details[metal] = history_to_dicts(points, options.time_range)

            name = METAL_NAMES.get(metal, metal)
            print(f"\n📈 {name} {metal}/{options.currency} 走势 ({options.time_range}, {options.city})")
            print("=" * 40)
            for item in details[metal]:
                print(f"  {item['date']:<32} {item['price']:>12,.2f}")
            print("=" * 40)

        return TaskResult(
            success=True,
            task_type="history",
            message=f"走势生成完成: {options.time_range}, 共 {sum(len(v) for v in details.values())} 个点",
            started_at=started_at,
            finished_at=datetime.now(),
            details={metal: len(points) for metal, points in details.items()},
        )

    except Exception as e:
        logger.error(f"走势查询异常: {e}", exc_info=True)
        return TaskResult(
            success=False,
            task_type="history",
            message=f"任务异常: {str(e)}",
            started_at=started_at,
            finished_at=datetime.now(),
            details={"exception": str(e)}
        )


async def run_city_rates_task(options: TaskOptions) -> TaskResult:
    """查询城市对比表"""
    started_at = datetime.now()

    try:
        rows = await build_city_rates(options.currency)

        print(f"\n🏙  城市金银价格 ({options.currency}/克)")
        print("=" * 56)
        print(f"  {'城市':<12}{'24k':>12}{'22k':>12}{'白银':>12}")
        for row in rows:
            print(f"  {row.city:<12}{row.gold_24k:>12,.0f}{row.gold_22k:>12,.0f}{row.silver:>12,.1f}")
        print("=" * 56)

        return TaskResult(
            success=True,
            task_type="cities",
            message=f"城市对比表生成完成: {len(rows)} 个城市",
            started_at=started_at,
            finished_at=datetime.now(),
            details={"cities": len(rows)},
        )

    except Exception as e:
        logger.error(f"城市对比表异常: {e}", exc_info=True)
        return TaskResult(
            success=False,
            task_type="cities",
            message=f"任务异常: {str(e)}",
            started_at=started_at,
            finished_at=datetime.now(),
            details={"exception": str(e)}
        )


async def run_closing_rates_task(options: TaskOptions) -> TaskResult:
    """查询最近 10 天收盘价"""
    started_at = datetime.now()

    try:
        rows = await build_closing_rates(options.currency, options.city)

        print(f"\n📅 最近 {len(rows)} 天收盘价 ({options.city})")
        print("=" * 50)
        print(f"  {'日期':<12}{'黄金/10克':>16}{'白银/千克':>16}")
        for row in rows:
            print(f"  {row.date.date().isoformat():<12}{row.gold_per_10g:>16,.0f}{row.silver_per_kg:>16,.0f}")
        print("=" * 50)

        return TaskResult(
            success=True,
            task_type="closing",
            message=f"收盘价表生成完成: {len(rows)} 天",
            started_at=started_at,
            finished_at=datetime.now(),
            details={"days": len(rows)},
        )

    except Exception as e:
        logger.error(f"收盘价表异常: {e}", exc_info=True)
        return TaskResult(
            success=False,
            task_type="closing",
            message=f"任务异常: {str(e)}",
            started_at=started_at,
            finished_at=datetime.now(),
            details={"exception": str(e)}
        )


async def execute_task(task_type: str, options: Optional[TaskOptions] = None) -> TaskResult:
    """
    统一任务执行入口

    Args:
        task_type: 任务类型
            - "quote": 实时报价与趋势
            - "history": 历史走势
            - "cities": 城市对比表
            - "closing": 最近 10 天收盘价
            - "all": 执行所有任务
        options: 任务参数，默认 INR / National / 1D

    Returns:
        TaskResult: 任务执行结果（all 时返回综合结果）
    """
    options = options or TaskOptions()

    if task_type == "quote":
        return await run_quote_task(options)

    elif task_type == "history":
        return await run_history_task(options)

    elif task_type == "cities":
        return await run_city_rates_task(options)

    elif task_type == "closing":
        return await run_closing_rates_task(options)

    elif task_type == "all":
        # 依次执行所有任务
        results = [
            await run_quote_task(options),
            await run_city_rates_task(options),
            await run_closing_rates_task(options),
        ]

        # 返回综合结果
        return TaskResult(
            success=all(result.success for result in results),
            task_type="all",
            message=", ".join(f"{result.task_type}: {result.success}" for result in results),
            started_at=results[0].started_at,
            finished_at=results[-1].finished_at,
            details={result.task_type: result.message for result in results},
        )

    else:
        return TaskResult(
            success=False,
            task_type=task_type,
            message=f"未知任务类型: {task_type}",
            started_at=datetime.now(),
            finished_at=datetime.now(),
        )


# ======================
# 初始化：注册默认处理器
# ======================
def init_default_processors() -> None:
    """注册默认的后置处理器"""
    register_processor(log_result_processor)
    register_processor(summary_printer_processor)


# 模块加载时自动注册默认处理器
init_default_processors()
