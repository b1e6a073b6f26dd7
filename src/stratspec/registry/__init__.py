from stratspec.registry.variants import (
    VARIANTS,
    all_variants,
    component_params,
    resolve,
    resolve_params,
)

__all__ = [
    "VARIANTS",
    "all_variants",
    "component_params",
    "resolve",
    "resolve_params",
]
