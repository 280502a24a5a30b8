from .cache import ScratchCache
from .context import MetricContext
from .mode import IdentificationMode

__all__ = ["IdentificationMode", "MetricContext", "ScratchCache"]
