from datetime import timedelta

from pyln.client import Millisatoshi

from conftest import NOW, forward
from feeschart.forwards import (Channel, ForwardEvent, forwards_via_peer, msat, node_info, parse_forward,
                                private_channels, settled_forwards)

PEER = "02" + "ab" * 32
OTHER = "03" + "cd" * 32


def test_msat_amounts():
    assert msat(1500) == 1500
    assert msat("1500msat") == 1500
    assert msat(Millisatoshi(1500)) == 1500
    assert msat(None) == 0


def test_parse_forward():
    event = parse_forward(forward(1234, NOW, in_channel="1x2x3", out_channel="4x5x6"))
    assert event == ForwardEvent(1234, NOW, "1x2x3", "4x5x6")


def test_parse_legacy_fee_field():
    raw = forward(0, NOW)
    del raw["fee_msat"]
    raw["fee"] = 77
    assert parse_forward(raw).fee == 77


def test_settled_forwards_in_window():
    start = NOW - timedelta(days=1)
    listforwards = {"forwards": [
        forward(1, NOW - timedelta(hours=2)),
        forward(2, NOW - timedelta(days=2)),
        forward(3, NOW - timedelta(hours=1), status="failed"),
        forward(4, NOW - timedelta(hours=5)),
        forward(5, start),
    ]}
    fees = [f.fee for f in settled_forwards(listforwards, start, NOW, 99999)]
    assert fees == [5, 4, 1]


def test_settled_forwards_keeps_most_recent_over_limit():
    logged = []
    listforwards = {"forwards": [forward(i, NOW - timedelta(minutes=i)) for i in range(1, 6)]}
    kept = settled_forwards(listforwards, NOW - timedelta(days=1), NOW, 2,
                            log=lambda message, level="info": logged.append(level))
    assert [f.fee for f in kept] == [2, 1]
    assert logged == ["warn"]


def test_private_channels_only():
    listpeerchannels = {"channels": [
        {"peer_id": PEER, "short_channel_id": "1x1x1", "private": True},
        {"peer_id": PEER, "short_channel_id": "2x2x2", "private": False},
        {"peer_id": OTHER, "private": True},
    ]}
    assert private_channels(listpeerchannels) == [Channel("1x1x1", PEER, True)]


def test_node_info():
    info = node_info({"nodes": [{"nodeid": PEER, "alias": "ACINQ"}]},
                     {"channels": [{"source": PEER, "destination": OTHER, "short_channel_id": "9x9x9",
                                    "public": True}]})
    assert info.alias == "ACINQ"
    assert info.channels == [Channel("9x9x9", PEER, False)]


def test_unknown_node_has_no_alias():
    info = node_info({"nodes": []}, {"channels": []})
    assert info.alias is None
    assert info.channels == []


def test_forwards_via_peer_keeps_order():
    forwards = [
        ForwardEvent(1, NOW, "1x1x1", "5x5x5"),
        ForwardEvent(2, NOW, "5x5x5", "6x6x6"),
        ForwardEvent(3, NOW, "6x6x6", "9x9x9"),
        ForwardEvent(4, NOW, "7x7x7", "1x1x1"),
    ]
    private = [Channel("1x1x1", PEER, True), Channel("6x6x6", OTHER, True)]
    public = [Channel("9x9x9", PEER, False)]
    assert [f.fee for f in forwards_via_peer(forwards, private, public, PEER)] == [1, 3, 4]


def test_forwards_via_peer_without_channels():
    forwards = [ForwardEvent(i, NOW, "1x1x1", "2x2x2") for i in range(10)]
    assert forwards_via_peer(forwards, [], [], PEER) == []


def test_forwards_via_peer_skips_channels_with_unknown_peer():
    forwards = [ForwardEvent(1, NOW, "1x1x1", "2x2x2"), ForwardEvent(2, NOW, "3x3x3", "2x2x2")]
    private = [Channel("1x1x1", None, True), Channel("3x3x3", PEER, True)]
    assert [f.fee for f in forwards_via_peer(forwards, private, [], PEER)] == [2]
