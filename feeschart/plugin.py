from pyln.client import Plugin, RpcException

from .chart import FORWARDS_LIMIT, SUBUNITS_PER_UNIT, get_fees_chart
from .errors import FeesChartError, UpstreamUnavailable

plugin = Plugin()
plugin.subunits_per_unit = SUBUNITS_PER_UNIT
plugin.forwards_limit = FORWARDS_LIMIT

plugin.add_option(
    name="feeschart-subunits-per-unit",
    default=SUBUNITS_PER_UNIT,
    description="Fee units (msat) per unit shown in the chart description total",
    opt_type="int",
)
plugin.add_option(
    name="feeschart-forwards-limit",
    default=FORWARDS_LIMIT,
    description="Maximum number of forwards charted per call, most recent first",
    opt_type="int",
)


def _flag(value) -> bool:
    # lightning-cli -k hands booleans over as strings
    return bool(value) and str(value).lower() not in ("false", "0")


@plugin.method("feeschart")
def feeschart(plugin: Plugin, days=None, is_count=False, via=None, **kwargs):
    """Chart routing fees earned over the last `days`.

    Returns one value per hour (under 4 days), day (up to 90) or week,
    with a description and title for the chart. With `is_count` the values
    are numbers of forwards instead of fees. With `via` only forwards
    through that peer are counted.
    """
    try:
        chart = get_fees_chart(plugin.rpc, days, is_count=_flag(is_count), via=via,
                               subunits_per_unit=plugin.subunits_per_unit,
                               limit=plugin.forwards_limit, log=plugin.log)
    except FeesChartError as e:
        if isinstance(e, UpstreamUnavailable):
            plugin.log("feeschart failed: %s (%s)" % (e.message, e.__cause__), "warn")
        raise RpcException(e.message, code=e.code) from e

    return dict(chart._asdict())


@plugin.init()
def init(options: dict, configuration: dict, plugin: Plugin, **kwargs):
    plugin.subunits_per_unit = int(options["feeschart-subunits-per-unit"])
    plugin.forwards_limit = int(options["feeschart-forwards-limit"])
    plugin.log(f"Plugin feeschart initialized with forwards limit {plugin.forwards_limit}")


def main():
    plugin.run()


if __name__ == "__main__":
    main()
