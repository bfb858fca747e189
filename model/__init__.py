from .quote import Quote
from .history import HistoryPoint, history_to_dicts, utc_now
from .market import (
    TROY_OUNCE_TO_GRAM,
    PURITY_MULTIPLIERS,
    SUPPORTED_METALS,
    SUPPORTED_CURRENCIES,
    SUPPORTED_CITIES,
    SUPPORTED_RANGES,
    DEFAULT_CITY,
    CITY_VARIANCE,
    CURRENCY_FACTORS,
    MOCK_BASES,
    check_params,
)


__all__ = ['Quote',
           'HistoryPoint',
           'history_to_dicts',
           'utc_now',
           'TROY_OUNCE_TO_GRAM',
           'PURITY_MULTIPLIERS',
           'SUPPORTED_METALS',
           'SUPPORTED_CURRENCIES',
           'SUPPORTED_CITIES',
           'SUPPORTED_RANGES',
           'DEFAULT_CITY',
           'CITY_VARIANCE',
           'CURRENCY_FACTORS',
           'MOCK_BASES',
           'check_params']
