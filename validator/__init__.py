from .quote_validator import (
    parse_live_payload,
    calculate_gram_prices,
    check_purity_order,
    PayloadError,
)


__all__ = [
    "parse_live_payload",
    "calculate_gram_prices",
    "check_purity_order",
    "PayloadError",
]
