"""Flask application serving the PumpSwap dashboard"""
import logging
from typing import Dict, Optional

from flask import Flask, jsonify, render_template
from flask_cors import CORS

from src.adapters.base import ProtocolAdapter
from src.adapters.defillama import DefiLlamaAdapter
from src.api.pumpswap_routes import pumpswap_bp, init_pumpswap
from src.config import load_config

logger = logging.getLogger(__name__)


def configure_logging(config: Dict):
    """Configure root logging from the 'logging' config section"""
    level = config.get('logging', {}).get('level', 'INFO')
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def create_app(config: Optional[Dict] = None,
               adapter: Optional[ProtocolAdapter] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Loaded configuration; read from config/app.yaml when omitted
        adapter: Upstream data source; a DefiLlamaAdapter is built from the
            'upstream' config section when omitted
    """
    if config is None:
        config = load_config()
    configure_logging(config)

    if adapter is None:
        upstream = config['upstream']
        adapter = DefiLlamaAdapter(upstream['protocol'], upstream)

    app = Flask(__name__,
                template_folder='../../templates',
                static_folder='../../static')
    app.config['DASHBOARD'] = config
    # Proxied upstream bodies keep their key order
    app.json.sort_keys = False
    CORS(app)

    init_pumpswap(adapter)
    app.register_blueprint(pumpswap_bp)

    @app.route('/')
    def index():
        """Main landing page"""
        return render_template('index.html')

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({'status': 'healthy'}), 200

    logger.info("Dashboard configured for protocol '%s'", adapter.protocol_name)
    return app


if __name__ == '__main__':
    app_config = load_config()
    server = app_config['server']
    create_app(app_config).run(debug=server['debug'], host=server['host'], port=server['port'])
