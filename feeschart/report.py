import os
import sys
from datetime import datetime
from os.path import expanduser

from pyln.client import LightningRpc

from .chart import get_fees_chart
from .errors import FeesChartError
from .segments import select_granularity, trailing_window

BAR_WIDTH = 40


def print_usage_and_die():
    sys.stderr.write("Usage:\n")
    sys.stderr.write("%s days [fees|count] [via_node_id]\n" % os.path.basename(sys.argv[0]))
    sys.stderr.write("\n")
    sys.stderr.write("Charts your C-Lightning node's collected routing fees (or number of forwards)\n")
    sys.stderr.write("over the last `days`, per hour, day or week. With via_node_id only forwards\n")
    sys.stderr.write("through channels with that peer are counted.\n")
    sys.stderr.write("\n")
    sys.stderr.write("The node is reached over $LIGHTNING_RPC, or ~/.lightning/bitcoin/lightning-rpc.\n")
    sys.exit(1)


def log_to_stderr(message: str, level: str = "info"):
    if level != "debug":
        sys.stderr.write("%s: %s\n" % (level, message))


def format_value(value: int, is_count: bool) -> str:
    if is_count:
        return "%d" % value
    return "%.3f sat" % (value / 1000.0)


def render_table(chart, bucket_starts, is_count: bool) -> str:
    labels = [start.strftime("%Y-%m-%d %H:%M") for start in bucket_starts]
    values = [format_value(v, is_count) for v in chart.data]
    width = max([len(v) for v in values] + [5])
    peak = max(chart.data + [0])

    lines = [chart.title, ""]
    for label, value, raw in zip(labels, values, chart.data):
        bar = "█" * (round(raw * BAR_WIDTH / peak) if peak else 0)
        lines.append("%s │ %s │ %s" % (label, value.rjust(width), bar))
    lines.append("")
    lines.append(chart.description)
    return "\n".join(lines)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 1 or len(args) > 3:
        print_usage_and_die()

    try:
        days = int(args[0])
    except ValueError:
        print_usage_and_die()
    if days <= 0:
        print_usage_and_die()

    mode = args[1] if len(args) > 1 else "fees"
    if mode not in ("fees", "count"):
        print_usage_and_die()
    is_count = mode == "count"
    via = args[2] if len(args) > 2 else None

    rpc = LightningRpc(os.environ.get("LIGHTNING_RPC", expanduser("~") + "/.lightning/bitcoin/lightning-rpc"))

    # one clock reading for both the chart and the row labels
    now = datetime.now()
    try:
        chart = get_fees_chart(rpc, days, is_count=is_count, via=via, clock=lambda: now, log=log_to_stderr)
    except FeesChartError as e:
        sys.stderr.write("[%d, %s] %s\n" % (e.code, e.message, e.__cause__ or ""))
        sys.exit(1)

    window = trailing_window(days, lambda: now)
    unit, segments = select_granularity(days)
    bucket_starts = [window.start + i * unit.duration for i in range(segments)]
    print(render_table(chart, bucket_starts, is_count))


if __name__ == "__main__":
    main()
