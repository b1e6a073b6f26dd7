from stratspec.policy.fees import FeeModel, estimate_probability
from stratspec.policy.risk import RiskPolicy, RiskThresholds, SizingPolicy

__all__ = ["FeeModel", "RiskPolicy", "RiskThresholds", "SizingPolicy", "estimate_probability"]
