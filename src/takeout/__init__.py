from .catalog import ServiceCatalog, default_catalog
from .lifecycle import LifecycleController
from .models import DisableResult, EnableResult, FailureKind, LifecycleState, PromptSpec, ServiceDefinition
from .tags import TagResolver

__version__ = "0.1.0"
__all__ = (
    "ServiceCatalog",
    "default_catalog",
    "LifecycleController",
    "TagResolver",
    "ServiceDefinition",
    "PromptSpec",
    "EnableResult",
    "DisableResult",
    "FailureKind",
    "LifecycleState",
)
