"""Data models for protocol snapshots"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ChartPoint:
    """A single point of a daily time series"""
    date: int  # Unix timestamp (seconds)
    value: float


def _to_number(value) -> Optional[float]:
    """Return value as float, or None for anything that is not a real number"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _to_text(value) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _history_points(series) -> List[ChartPoint]:
    """Parse a list of {date, totalLiquidityUSD} entries, skipping bad rows"""
    points = []
    if not isinstance(series, list):
        return points
    for entry in series:
        if not isinstance(entry, dict):
            continue
        date = _to_number(entry.get('date'))
        value = _to_number(entry.get('totalLiquidityUSD'))
        if date is None or value is None:
            continue
        points.append(ChartPoint(date=int(date), value=value))
    return points


def metric_points(summary) -> List[ChartPoint]:
    """
    Extract chart points from a DefiLlama summary response.

    Args:
        summary: Decoded JSON with a ``totalDataChart`` list of [timestamp, value]

    Returns:
        List of ChartPoint in upstream order
    """
    points = []
    if not isinstance(summary, dict):
        return points
    for entry in summary.get('totalDataChart') or []:
        if not isinstance(entry, (list, tuple)) or len(entry) < 2:
            continue
        date = _to_number(entry[0])
        value = _to_number(entry[1])
        if date is None or value is None:
            continue
        points.append(ChartPoint(date=int(date), value=value))
    return points


@dataclass
class ProtocolSnapshot:
    """Protocol data as returned by the upstream aggregator.

    Every field is optional; the upstream contract is not versioned and any
    subset may be missing.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tvl: Optional[float] = None
    chain_tvls: Dict[str, float] = field(default_factory=dict)
    change_1d: Optional[float] = None
    change_7d: Optional[float] = None
    change_1m: Optional[float] = None
    tvl_prev_day: Optional[float] = None
    tvl_prev_week: Optional[float] = None
    tvl_prev_month: Optional[float] = None
    tvl_history: List[ChartPoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict) -> 'ProtocolSnapshot':
        """
        Build a snapshot from the upstream JSON object.

        ``tvl`` may be a number or the DefiLlama history list, in which case
        the current value is the last history entry. ``chainTvls`` values may
        be numbers or per-chain objects carrying their own ``tvl`` history;
        ``currentChainTvls`` takes precedence when present.
        """
        raw_tvl = data.get('tvl')
        history = _history_points(raw_tvl)
        tvl = _to_number(raw_tvl)
        if tvl is None and history:
            tvl = history[-1].value

        return cls(
            name=_to_text(data.get('name')),
            description=_to_text(data.get('description')),
            category=_to_text(data.get('category')),
            tvl=tvl,
            chain_tvls=cls._parse_chain_tvls(data),
            change_1d=_to_number(data.get('change_1d')),
            change_7d=_to_number(data.get('change_7d')),
            change_1m=_to_number(data.get('change_1m')),
            tvl_prev_day=_to_number(data.get('tvlPrevDay')),
            tvl_prev_week=_to_number(data.get('tvlPrevWeek')),
            tvl_prev_month=_to_number(data.get('tvlPrevMonth')),
            tvl_history=history,
        )

    @staticmethod
    def _parse_chain_tvls(data: Dict) -> Dict[str, float]:
        current = data.get('currentChainTvls')
        if isinstance(current, dict) and current:
            source = current
        else:
            source = data.get('chainTvls')
        if not isinstance(source, dict):
            return {}

        chain_tvls = {}
        for chain, value in source.items():
            amount = _to_number(value)
            if amount is None and isinstance(value, dict):
                series = _history_points(value.get('tvl'))
                if series:
                    amount = series[-1].value
            if amount is not None:
                chain_tvls[str(chain)] = amount
        return chain_tvls
