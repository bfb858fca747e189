"""
Metal Rates - 金银行情看板
主程序入口
"""
import sys
import asyncio
import argparse
from datetime import datetime
from typing import Any, Hashable, Optional

from core import execute_task, TaskResult, TaskOptions, TASK_TYPES, RatePoller
from core.trend import STRATEGIES
from model import SUPPORTED_METALS, SUPPORTED_CURRENCIES, SUPPORTED_CITIES, SUPPORTED_RANGES, Quote
from utils.logger import logger


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog="metal_rates",
        description="金银行情看板 - 实时报价、城市价格、历史走势与趋势判断",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  python main.py                              # 查询金银实时报价（默认 INR）
  python main.py --task quote -c USD          # 以美元查询实时报价
  python main.py --task history -r 1W -m XAU  # 黄金周线走势
  python main.py --task cities                # 城市对比表
  python main.py --task closing --city Mumbai # 孟买最近 10 天收盘价
  python main.py --task all                   # 执行所有查询
  python main.py --task watch                 # 定时刷新，Ctrl+C 退出

配置:
  设置环境变量 GOLD_API_KEY 使用 GoldAPI 实时数据，未设置时使用模拟数据。
        """
    )

    parser.add_argument(
        "--task", "-t",
        choices=[*TASK_TYPES, "watch"],
        default="quote",
        help="任务类型: quote=实时报价, history=历史走势, cities=城市对比, closing=收盘价, all=全部, watch=定时刷新 (默认: quote)"
    )

    parser.add_argument(
        "--metal", "-m",
        choices=SUPPORTED_METALS,
        help="金属代码，默认同时查询黄金与白银"
    )

    parser.add_argument(
        "--currency", "-c",
        choices=SUPPORTED_CURRENCIES,
        default="INR",
        help="货币 (默认: INR)"
    )

    parser.add_argument(
        "--city",
        choices=SUPPORTED_CITIES,
        default="National",
        help="城市 (默认: National)"
    )

    parser.add_argument(
        "--range", "-r",
        dest="time_range",
        choices=SUPPORTED_RANGES,
        default="1D",
        help="走势时间范围 (默认: 1D)"
    )

    parser.add_argument(
        "--strategy", "-s",
        choices=sorted(STRATEGIES),
        help="趋势策略，默认黄金用 sma、白银用 change"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="静默模式，减少输出"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version="%(prog)s 0.1.0"
    )

    return parser.parse_args(argv)


def print_banner() -> None:
    """打印启动横幅"""
    print()
    print("╔════════════════════════════════════════╗")
    print("║      Metal Rates - 金银行情看板         ║")
    print("╚════════════════════════════════════════╝")
    print()


def print_result(result: TaskResult, quiet: bool = False) -> None:
    """打印任务执行结果"""
    if quiet:
        # 静默模式只输出关键信息
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] {result.task_type}: {result.message}")
        return

    print()
    print("─" * 50)
    print("任务执行结果")
    print("─" * 50)
    print(f"  状态:   {'✅ 成功' if result.success else '❌ 失败'}")
    print(f"  类型:   {result.task_type}")
    print(f"  消息:   {result.message}")
    print(f"  开始:   {result.started_at.strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"  结束:   {result.finished_at.strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"  耗时:   {(result.finished_at - result.started_at).total_seconds():.2f} 秒")

    if result.details:
        print(f"  详情:   {result.details}")
    print("─" * 50)


def print_update(key: Hashable, value: Any) -> None:
    """定时刷新回调：打印最新数据"""
    now = datetime.now().strftime('%H:%M:%S')
    if isinstance(value, Quote):
        print(f"[{now}] {value.symbol} ({value.city}) {value.price:,.2f}  "
              f"{value.chp:+.2f}%  24k/克 {value.price_gram_24k:,.2f}  [{value.source}]")
    else:
        print(f"[{now}] 城市对比表已刷新: {len(value)} 个城市")


async def watch(options: TaskOptions) -> None:
    """定时刷新，直到 Ctrl+C"""
    poller = RatePoller(
        options.currency,
        options.city,
        metals=options.metals,
        listener=print_update,
    )
    await poller.run()


def main(argv: Optional[list] = None) -> int:
    """
    主函数

    Returns:
        int: 退出码 (0=成功, 1=失败)
    """
    args = parse_args(argv)

    if not args.quiet:
        print_banner()
        print(f"⏰ 启动时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print(f"📋 任务类型: {args.task}")
        print(f"💱 货币/城市: {args.currency} / {args.city}")
        print()

    options = TaskOptions(
        currency=args.currency,
        city=args.city,
        time_range=args.time_range,
        metals=(args.metal,) if args.metal else SUPPORTED_METALS,
        strategy=args.strategy,
    )

    if args.task == "watch":
        try:
            asyncio.run(watch(options))
        except KeyboardInterrupt:
            print("\n已停止定时刷新")
        return 0

    # 执行任务
    try:
        result = asyncio.run(execute_task(args.task, options))
    except Exception as e:
        logger.critical(f"任务执行异常: {e}", exc_info=True)
        print(f"❌ 任务执行异常: {e}")
        return 1

    # 输出结果
    print_result(result, args.quiet)

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
