from .types import BindingType, ExecutableBinding, ConfigBinding, DataBinding, BindingsConfig

__all__ = [
    "BindingType",
    "ExecutableBinding",
    "ConfigBinding",
    "DataBinding",
    "BindingsConfig",
]
