"""PumpSwap API and page routes"""

import logging
from flask import Blueprint, jsonify, render_template, request

from src.adapters.base import ProtocolAdapter, UpstreamError
from src.services.dashboard_service import DashboardService, ERROR, TABS

logger = logging.getLogger(__name__)

pumpswap_bp = Blueprint('pumpswap', __name__)

UPSTREAM_ERROR = {'error': 'Failed to fetch data from DefiLlama'}

# Initialized when the app starts
adapter = None
dashboard_service = None


def init_pumpswap(protocol_adapter: ProtocolAdapter):
    """Initialize routes with the upstream adapter"""
    global adapter, dashboard_service
    adapter = protocol_adapter
    dashboard_service = DashboardService(protocol_adapter)


# ============================================
# API Endpoints
# ============================================

@pumpswap_bp.route('/api/pumpswap')
def api_get_protocol():
    """Proxy the upstream protocol snapshot unmodified"""
    try:
        data = adapter.fetch_protocol()
    except UpstreamError as e:
        logger.error("Error fetching DefiLlama data: %s", e)
        return jsonify(UPSTREAM_ERROR), 500
    return jsonify(data)


@pumpswap_bp.route('/api/pumpswap/chart')
def api_get_chart():
    """Chart series for one dashboard tab

    Query params:
        metric: 'tvl', 'volume', 'fees', or 'revenue' (default: 'tvl')
    """
    metric = request.args.get('metric', default='tvl', type=str)
    if metric not in TABS:
        return jsonify({'error': 'Invalid metric. Must be tvl, volume, fees, or revenue'}), 400
    return jsonify(dashboard_service.load_chart(metric))


@pumpswap_bp.route('/api/pumpswap/<metric>')
def api_get_metric(metric):
    """Proxy the upstream daily summary for volume, fees or revenue

    Args:
        metric: 'volume', 'fees', or 'revenue'
    """
    if metric not in adapter.METRICS:
        return jsonify({'error': 'Invalid metric. Must be volume, fees, or revenue'}), 400

    try:
        data = adapter.fetch_metric(metric)
    except UpstreamError as e:
        logger.error("Error fetching DefiLlama %s data: %s", metric, e)
        return jsonify(UPSTREAM_ERROR), 500
    return jsonify(data)


# ============================================
# Web Pages
# ============================================

@pumpswap_bp.route('/pumpswap')
def pumpswap_page():
    """Detail page shell; the panel is fetched once the page has loaded"""
    return render_template('pumpswap.html')


@pumpswap_bp.route('/pumpswap/panel')
def pumpswap_panel():
    """Server-rendered detail panel with the snapshot and TVL chart"""
    view = dashboard_service.load()
    status = 502 if view.state == ERROR else 200
    return render_template('_panel.html', view=view), status
