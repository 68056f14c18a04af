"""
Core primitives of the money API client: models, requests, adapters, transport.
"""

from .client import ApiClient, execute_request
from .config import (
    ApiConfig,
    ApiParameters,
    ConfigError,
    HostsProvider,
    load_api_config,
    read_env_file,
    resolve_settings,
)
from .errors import ConsistencyError, MoneyApiError, ParseError, ValidationError
from .models import (
    WALLET,
    Avatar,
    DigitalGoods,
    Good,
    MoneySource,
    ProcessPayment,
    ProcessPaymentBuilder,
    Status,
)
from .payloads import (
    ApiRequest,
    ProcessPaymentRequest,
    TestResult,
    build_process_payment_request,
)
from .typeadapters import (
    AvatarTypeAdapter,
    DigitalGoodsTypeAdapter,
    MoneySourceTypeAdapter,
    ProcessPaymentTypeAdapter,
    TypeAdapter,
    parse,
    serialize,
)

__all__ = [
    "ApiClient",
    "ApiConfig",
    "ApiParameters",
    "ApiRequest",
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
    "execute_request",
    "load_api_config",
    "read_env_file",
    "resolve_settings",
    "parse",
    "serialize",
]
