"""Base abstract class for protocol data sources"""
from abc import ABC, abstractmethod
from typing import Dict


class UpstreamError(Exception):
    """Raised when the upstream data source cannot deliver a usable response"""


class ProtocolAdapter(ABC):
    """Base class for protocol data sources"""

    METRICS = ('volume', 'fees', 'revenue')

    def __init__(self, protocol_name: str, config: Dict):
        self.protocol_name = protocol_name
        self.config = config

    @abstractmethod
    def fetch_protocol(self) -> Dict:
        """
        Fetch the current protocol snapshot.

        Returns:
            The decoded JSON object, unmodified

        Raises:
            UpstreamError: if the request fails or the body is not JSON
        """
        pass

    @abstractmethod
    def fetch_metric(self, metric: str) -> Dict:
        """
        Fetch the daily summary for a secondary metric.

        Args:
            metric: One of METRICS ('volume', 'fees', 'revenue')

        Returns:
            The decoded JSON object, unmodified

        Raises:
            ValueError: if metric is not supported
            UpstreamError: if the request fails or the body is not JSON
        """
        pass
