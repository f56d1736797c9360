from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, List, NamedTuple, Optional

from pyln.client import RpcError

from .errors import InvalidArgument, UpstreamUnavailable
from .forwards import NodeInfo, forwards_via_peer, node_info, private_channels, settled_forwards
from .relative import calendar_phrase
from .segments import Granularity, TimeWindow, fees_for_segments, select_granularity, total_earned, trailing_window

FORWARDS_LIMIT = 99999
SUBUNITS_PER_UNIT = 100000000000  # msat per BTC


class ChartResult(NamedTuple):
    data: List[int]
    description: str
    title: str


def _quiet(message: str, level: str = "info"):
    pass


def chart_description(is_count: bool, segments: int, unit: Granularity, window: TimeWindow,
                      forwards_count: int, earned: int, subunits_per_unit: int) -> str:
    since = "since %s" % calendar_phrase(window.start, window.end).lower()

    if is_count:
        return "Forwarded in %d %ss %s. Total: %d forwards" % (segments, unit.value, since, forwards_count)
    else:
        return "Earned in %d %ss %s. Total: %.8f" % (segments, unit.value, since, earned / subunits_per_unit)


def chart_title(is_count: bool, via: Optional[str], alias: Optional[str]) -> str:
    head = "Forwards count" if is_count else "Routing fees earned"
    if not via:
        return head
    return "%s via %s" % (head, alias or via)


def lookup_node(rpc, node_id: str) -> NodeInfo:
    return node_info(rpc.listnodes(node_id), rpc.listchannels(source=node_id))


def _upstream(error_code: str, call: Callable, *args, **kwargs):
    try:
        return call(*args, **kwargs)
    except (RpcError, OSError) as e:
        raise UpstreamUnavailable(error_code) from e


def _check_days(days) -> int:
    if isinstance(days, bool) or days is None or days == "":
        raise InvalidArgument("ExpectedNumberOfDaysToGetFeesOverForChart")
    try:
        value = float(days)
    except (TypeError, ValueError, OverflowError):
        raise InvalidArgument("ExpectedNumberOfDaysToGetFeesOverForChart") from None
    # nan and inf are not integers either
    if not value.is_integer() or value <= 0:
        raise InvalidArgument("ExpectedNumberOfDaysToGetFeesOverForChart")
    return int(value)


def get_fees_chart(rpc, days, is_count: bool = False, via: Optional[str] = None,
                   subunits_per_unit: int = SUBUNITS_PER_UNIT, limit: int = FORWARDS_LIMIT,
                   clock: Callable[[], datetime] = datetime.now, log: Callable = _quiet) -> ChartResult:
    """Fees earned (or forwards made) over the last `days`, one value per bucket.

    `rpc` is anything with the `pyln.client.LightningRpc` methods. With `via`
    only forwards through that peer's channels are charted; without it no
    channel or node lookups are made.

    `days` is a positive whole number, given as an int, a float or a
    numeric string: 5, 5.0, "5" and "5.0" are all five days, while 2.5,
    "2.5", inf and booleans are rejected with InvalidArgument.
    """
    days = _check_days(days)
    if rpc is None:
        raise InvalidArgument("ExpectedLightningRpcToGetFeesChart")

    try:
        window = trailing_window(days, clock)
    except (OverflowError, ValueError):
        # the window would start before year 1
        raise InvalidArgument("ExpectedNumberOfDaysToGetFeesOverForChart") from None
    unit, segments = select_granularity(days)
    log("Charting %d %ss from %s to %s%s" % (segments, unit.value, window.start.isoformat(),
                                            window.end.isoformat(), " via %s" % via if via else ""), "debug")

    with ThreadPoolExecutor(max_workers=3) as executor:
        get_forwards = executor.submit(_upstream, "UnexpectedErrorGettingForwards",
                                       rpc.listforwards, status="settled")
        if via:
            get_private_channels = executor.submit(_upstream, "UnexpectedErrorGettingPrivateChannels",
                                                   rpc.listpeerchannels)
            get_node = executor.submit(_upstream, "UnexpectedErrorGettingNode", lookup_node, rpc, via)

        forwards = settled_forwards(get_forwards.result(), window.start, window.end, limit, log)
        node = None
        if via:
            node = get_node.result()
            forwards = forwards_via_peer(forwards, private_channels(get_private_channels.result()),
                                         node.channels, via)

    sums = fees_for_segments(forwards, unit, segments, window.start)
    description = chart_description(is_count, len(sums.counts if is_count else sums.fees), unit, window,
                                    len(forwards), total_earned(forwards), subunits_per_unit)
    title = chart_title(is_count, via, node.alias if node else None)

    return ChartResult(sums.counts if is_count else sums.fees, description, title)
