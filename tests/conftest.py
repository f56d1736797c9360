from datetime import datetime, timedelta, timezone

import pytest
from pyln.client import RpcError

NOW = datetime(2026, 10, 18, 15, 0, tzinfo=timezone.utc)  # a Sunday


def forward(fee, received, in_channel="100x1x0", out_channel="200x1x0", status="settled"):
    return {
        "in_channel": in_channel,
        "out_channel": out_channel,
        "fee_msat": fee,
        "status": status,
        "received_time": received.timestamp(),
    }


class FakeRpc:
    """Stands in for LightningRpc, answering from canned results."""

    def __init__(self, forwards=(), peer_channels=(), nodes=(), channels=(), failing=()):
        self.forwards = list(forwards)
        self.peer_channels = list(peer_channels)
        self.nodes = list(nodes)
        self.channels = list(channels)
        self.failing = set(failing)
        self.calls = []

    def _call(self, method, result):
        self.calls.append(method)
        if method in self.failing:
            raise RpcError(method, {}, {"code": -1, "message": "%s unavailable" % method})
        return result

    def listforwards(self, status=None, in_channel=None, out_channel=None):
        forwards = [f for f in self.forwards if status is None or f["status"] == status]
        return self._call("listforwards", {"forwards": forwards})

    def listpeerchannels(self, peer_id=None):
        return self._call("listpeerchannels", {"channels": self.peer_channels})

    def listnodes(self, node_id=None):
        return self._call("listnodes", {"nodes": [n for n in self.nodes if n["nodeid"] == node_id]})

    def listchannels(self, short_channel_id=None, source=None, destination=None):
        return self._call("listchannels", {"channels": [c for c in self.channels if c["source"] == source]})


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def minutes_ago():
    return lambda n: NOW - timedelta(minutes=n)
