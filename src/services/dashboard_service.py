"""Dashboard service that turns protocol data into the detail page view model.

The detail page goes through a one-shot transition:

    loading -> ready   (snapshot received)
    loading -> empty   (upstream answered with an empty object)
    loading -> error   (upstream failed in any way)

``loading`` is only ever shown by the page shell while the panel request is
in flight; ``DashboardService.load`` always returns one of the final states.
Switching chart tabs afterwards only fetches that tab's series through
``DashboardService.load_chart``; the snapshot is not requested again.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.adapters.base import ProtocolAdapter, UpstreamError
from src.models import ProtocolSnapshot, metric_points
from src.services.charts import build_chart_data
from src.services.formatting import format_currency, format_percent

logger = logging.getLogger(__name__)

READY = 'ready'
EMPTY = 'empty'
ERROR = 'error'

ERROR_MESSAGE = 'Failed to load PumpSwap data'

# Tab key -> button label, in display order
TABS = {
    'tvl': 'TVL',
    'volume': 'Volume',
    'fees': 'Fees',
    'revenue': 'Revenue',
}

DATASET_LABELS = {
    'tvl': 'Total Value Locked (TVL)',
    'volume': 'Volume',
    'fees': 'Fees',
    'revenue': 'Revenue',
}


@dataclass
class Tab:
    key: str
    label: str
    active: bool = False


@dataclass
class Badge:
    """Percentage change badge (24h / 7d / 30d)"""
    label: str
    text: str
    positive: bool

    @property
    def css_class(self) -> str:
        return 'positive' if self.positive else 'negative'


@dataclass
class ChainCard:
    chain: str
    value: str


@dataclass
class DetailView:
    """View model for the detail page panel"""
    state: str
    error: Optional[str] = None
    snapshot: Optional[ProtocolSnapshot] = None
    chart: Optional[Dict] = None
    tabs: List[Tab] = field(default_factory=list)
    badges: List[Badge] = field(default_factory=list)
    chain_cards: List[ChainCard] = field(default_factory=list)

    @property
    def title(self) -> str:
        if self.snapshot and self.snapshot.name:
            return self.snapshot.name
        return 'N/A'

    @property
    def tvl_display(self) -> Optional[str]:
        """Formatted TVL, or None when the snapshot has no TVL"""
        if self.snapshot is None or self.snapshot.tvl is None:
            return None
        return format_currency(self.snapshot.tvl)

    @property
    def description(self) -> str:
        return (self.snapshot and self.snapshot.description) or 'N/A'

    @property
    def category(self) -> str:
        return (self.snapshot and self.snapshot.category) or 'N/A'


def build_badge(label: str, change: Optional[float]) -> Badge:
    """Green only when the change is present and non-negative"""
    return Badge(
        label=label,
        text=format_percent(change),
        positive=change is not None and change >= 0,
    )


def build_tabs(active_tab: str) -> List[Tab]:
    return [Tab(key=key, label=label, active=key == active_tab)
            for key, label in TABS.items()]


def build_chain_cards(chain_tvls: Dict[str, float]) -> List[ChainCard]:
    return [ChainCard(chain=chain, value=format_currency(value))
            for chain, value in chain_tvls.items()]


class DashboardService:
    """Loads protocol data through an adapter and builds DetailView objects"""

    def __init__(self, adapter: ProtocolAdapter):
        self.adapter = adapter

    def load(self) -> DetailView:
        """
        Fetch the snapshot once and build the panel with the TVL chart.

        Returns:
            DetailView in the ready, empty or error state
        """
        try:
            data = self.adapter.fetch_protocol()
        except UpstreamError as e:
            logger.error("Error loading %s data: %s", self.adapter.protocol_name, e)
            return DetailView(state=ERROR, error=ERROR_MESSAGE)

        if not data or not isinstance(data, dict):
            return DetailView(state=EMPTY)

        snapshot = ProtocolSnapshot.from_dict(data)

        return DetailView(
            state=READY,
            snapshot=snapshot,
            chart=build_chart_data('tvl', snapshot.tvl_history, DATASET_LABELS['tvl']),
            tabs=build_tabs('tvl'),
            badges=[
                build_badge('24h', snapshot.change_1d),
                build_badge('7d', snapshot.change_7d),
                build_badge('30d', snapshot.change_1m),
            ],
            chain_cards=build_chain_cards(snapshot.chain_tvls),
        )

    def load_chart(self, metric: str) -> Dict:
        """
        Chart series for one tab. Upstream failures yield an empty series so
        the page shows the chart placeholder and keeps everything else.

        Args:
            metric: Tab key ('tvl', 'volume', 'fees', 'revenue')

        Raises:
            ValueError: if metric is not a known tab
        """
        if metric not in TABS:
            raise ValueError(f"Unknown metric '{metric}'")

        try:
            if metric == 'tvl':
                data = self.adapter.fetch_protocol()
                points = ProtocolSnapshot.from_dict(data).tvl_history if isinstance(data, dict) else []
            else:
                points = metric_points(self.adapter.fetch_metric(metric))
        except UpstreamError as e:
            logger.error("Error loading %s for %s: %s",
                         metric, self.adapter.protocol_name, e)
            points = []
        return build_chart_data(metric, points, DATASET_LABELS[metric])
