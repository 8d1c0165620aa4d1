"""Shared test fixtures and sample data."""
import textwrap
from pathlib import Path
from typing import Dict, Optional

import pytest

from src.adapters.base import ProtocolAdapter, UpstreamError
from src.api.app import create_app


# ---------------------------------------------------------------------------
# Sample upstream data
# ---------------------------------------------------------------------------

DAY = 86400
START = 1741996800  # 2025-03-15 00:00 UTC


def tvl_history(days: int, base: float = 1_000_000.0):
    return [
        {'date': START + i * DAY, 'totalLiquidityUSD': base + i * 1000}
        for i in range(days)
    ]


@pytest.fixture()
def sample_snapshot() -> Dict:
    return {
        'name': 'PumpSwap',
        'description': 'AMM for tokens graduated from pump.fun',
        'category': 'Dexs',
        'tvl': 1234567,
        'chainTvls': {'Solana': 500000},
        'change_1d': -3.456,
        'change_7d': 12.3,
        'change_1m': None,
        'tvlPrevDay': 1250000,
        'tvlPrevWeek': 1100000,
        'tvlPrevMonth': 900000,
    }


@pytest.fixture()
def llama_snapshot() -> Dict:
    """Shape actually served by /protocol/<slug>"""
    return {
        'name': 'PumpSwap',
        'category': 'Dexs',
        'tvl': tvl_history(40),
        'chainTvls': {'Solana': {'tvl': tvl_history(40, base=2_000.0)}},
        'currentChainTvls': {'Solana': 1039000.0},
        'change_1d': 0.5,
    }


@pytest.fixture()
def sample_volume_summary() -> Dict:
    return {
        'name': 'PumpSwap',
        'totalDataChart': [[START + i * DAY, 5_000_000 + i] for i in range(45)],
    }


# ---------------------------------------------------------------------------
# Adapter and app fixtures
# ---------------------------------------------------------------------------


class FakeAdapter(ProtocolAdapter):
    """In-memory adapter; a value of UpstreamError raises it on fetch"""

    def __init__(self, snapshot=None, metrics: Optional[Dict] = None):
        super().__init__('pumpswap', {})
        self.snapshot = snapshot
        self.metrics = metrics or {}
        self.calls = []

    def fetch_protocol(self):
        self.calls.append('protocol')
        if self.snapshot is UpstreamError:
            raise UpstreamError("Failed to fetch data: 503")
        return self.snapshot

    def fetch_metric(self, metric):
        self.calls.append(metric)
        if metric not in self.METRICS:
            raise ValueError(f"Unsupported metric '{metric}'")
        result = self.metrics.get(metric, UpstreamError)
        if result is UpstreamError:
            raise UpstreamError("Failed to fetch data: 500")
        return result


@pytest.fixture()
def app_config() -> Dict:
    return {
        'upstream': {
            'base_url': 'https://llama.example.com',
            'protocol': 'pumpswap',
            'timeout': 5,
            'cache_ttl': 0,
        },
        'server': {'host': '127.0.0.1', 'port': 5000, 'debug': False},
        'logging': {'level': 'DEBUG'},
    }


@pytest.fixture()
def make_client(app_config):
    def _make(adapter: ProtocolAdapter):
        app = create_app(app_config, adapter=adapter)
        app.testing = True
        return app.test_client()
    return _make


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    upstream:
      base_url: https://llama.example.com
      protocol: pumpswap
      timeout: 7
    server:
      port: 8080
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "app.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture()
def fake_adapter():
    return FakeAdapter
