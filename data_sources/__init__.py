from .goldapi import fetch_live_rate
from .mock_rates import build_mock_quote, draw_jitter
from .mock_history import generate_mock_history


__all__ = [
    "fetch_live_rate",
    "build_mock_quote",
    "draw_jitter",
    "generate_mock_history",
]
