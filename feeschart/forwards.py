from datetime import datetime, timezone
from typing import List, NamedTuple, Optional, Sequence

from pyln.client import Millisatoshi


class ForwardEvent(NamedTuple):
    fee: int  # msat
    timestamp: datetime
    inbound_channel_id: str
    outbound_channel_id: str


class Channel(NamedTuple):
    id: str
    peer_id: Optional[str]
    is_private: bool


class NodeInfo(NamedTuple):
    alias: Optional[str]
    channels: List[Channel]


def msat(value) -> int:
    """Millisatoshi count of an RPC amount: int, "123msat" or Millisatoshi."""
    if value is None:
        return 0
    return Millisatoshi(value).millisatoshis


def parse_forward(forward: dict) -> ForwardEvent:
    # "fee" is the pre-0.12 spelling of "fee_msat"
    fee = forward["fee_msat"] if "fee_msat" in forward else forward.get("fee")
    return ForwardEvent(
        fee=msat(fee),
        timestamp=datetime.fromtimestamp(float(forward["received_time"]), tz=timezone.utc),
        inbound_channel_id=forward.get("in_channel"),
        outbound_channel_id=forward.get("out_channel"),
    )


def settled_forwards(listforwards: dict, start: datetime, end: datetime, limit: int, log=None) -> List[ForwardEvent]:
    """Settled forwards received between `start` and `end`, oldest first.

    Only the `limit` most recent are kept.
    """
    forwards = []
    for forward in listforwards["forwards"]:
        if forward.get("status") != "settled":
            continue
        event = parse_forward(forward)
        if start <= event.timestamp <= end:
            forwards.append(event)
    forwards.sort(key=lambda f: f.timestamp)
    if len(forwards) > limit:
        if log is not None:
            log("Only charting the last %d of %d forwards" % (limit, len(forwards)), "warn")
        forwards = forwards[-limit:]
    return forwards


def private_channels(listpeerchannels: dict) -> List[Channel]:
    channels = []
    for chan in listpeerchannels["channels"]:
        # unconfirmed channels have no scid yet and cannot have forwarded anything
        if chan.get("private") and "short_channel_id" in chan:
            channels.append(Channel(chan["short_channel_id"], chan.get("peer_id"), True))
    return channels


def node_info(listnodes: dict, listchannels: dict) -> NodeInfo:
    alias = None
    for node in listnodes["nodes"]:
        if node.get("alias"):
            alias = node["alias"]
    channels = [Channel(c["short_channel_id"], c.get("source"), not c.get("public", True))
                for c in listchannels["channels"]]
    return NodeInfo(alias, channels)


def forwards_via_peer(forwards: Sequence[ForwardEvent], private_channels: Sequence[Channel],
                      public_channels: Sequence[Channel], via: str) -> List[ForwardEvent]:
    """Forwards that came in from or went out to `via`, in their original order."""
    scids = set()
    for chan in list(private_channels) + list(public_channels):
        if chan.peer_id == via:
            scids.add(chan.id)

    return [f for f in forwards if f.inbound_channel_id in scids or f.outbound_channel_id in scids]
