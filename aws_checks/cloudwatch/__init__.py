from .metrics import *
from .thresholds import *

__all__ = [
    "CloudWatchMetrics",
    "MetricConfig",
    "MetricQuery",
    "MetricSettings",
    "ThresholdConfig",
    "Thresholds",
    "is_no_data",
    "normalize_statistic",
]
