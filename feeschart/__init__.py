from .chart import ChartResult, get_fees_chart
from .errors import FeesChartError, InvalidArgument, UpstreamUnavailable
from .segments import Granularity, select_granularity

__all__ = [
    "ChartResult",
    "FeesChartError",
    "Granularity",
    "InvalidArgument",
    "UpstreamUnavailable",
    "get_fees_chart",
    "select_granularity",
]
