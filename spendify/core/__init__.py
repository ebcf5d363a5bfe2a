"""Core package: provides models, database helpers, settings, exceptions and shared utilities."""

from .exceptions import FetchError, InsightsError, ValidationError  # noqa: F401
from .models import InsightsReport, InsightsRequest  # noqa: F401
from .settings import Settings, get_settings  # noqa: F401
from .utils import get_logger  # noqa: F401
