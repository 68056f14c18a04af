"""
Public facade for the money API client package.

The most useful pieces are re-exported here so integrators can
``from money_api import ...`` without navigating the package.
"""

from .api import create_api_client, process_payment
from .core import (
    WALLET,
    ApiClient,
    ApiConfig,
    ApiParameters,
    Avatar,
    AvatarTypeAdapter,
    ConfigError,
    ConsistencyError,
    DigitalGoods,
    DigitalGoodsTypeAdapter,
    Good,
    HostsProvider,
    MoneyApiError,
    MoneySource,
    MoneySourceTypeAdapter,
    ParseError,
    ProcessPayment,
    ProcessPaymentBuilder,
    ProcessPaymentRequest,
    ProcessPaymentTypeAdapter,
    Status,
    TestResult,
    TypeAdapter,
    ValidationError,
    build_process_payment_request,
    load_api_config,
    read_env_file,
    resolve_settings,
    parse,
    serialize,
)

__all__ = (
    "ApiClient",
    "ApiConfig",
    "ApiParameters",
    "Avatar",
    "AvatarTypeAdapter",
    "ConfigError",
    "ConsistencyError",
    "DigitalGoods",
    "DigitalGoodsTypeAdapter",
    "Good",
    "HostsProvider",
    "MoneyApiError",
    "MoneySource",
    "MoneySourceTypeAdapter",
    "ParseError",
    "ProcessPayment",
    "ProcessPaymentBuilder",
    "ProcessPaymentRequest",
    "ProcessPaymentTypeAdapter",
    "Status",
    "TestResult",
    "TypeAdapter",
    "ValidationError",
    "WALLET",
    "build_process_payment_request",
    "create_api_client",
    "load_api_config",
    "read_env_file",
    "resolve_settings",
    "parse",
    "process_payment",
    "serialize",
)
