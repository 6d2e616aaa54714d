import logging
from datetime import datetime

from flask import Flask, jsonify

from blueprints.activity import activity_bp
from blueprints.converter import converter_bp
from blueprints.units import units_bp
from config.settings import get_enabled_tools, load_config
from config.tools import TOOLS
from converters.units import DISPLAY_PRECISION
from tracking.activity import activity_store

logger = logging.getLogger(__name__)


def create_app(config=None):
    """Build the Flask application from a loaded configuration."""
    config = config if config is not None else load_config()

    app = Flask(__name__)
    app.config['TOOLBOX'] = config
    app.config['DISPLAY_PRECISION'] = config.get('display_precision', DISPLAY_PRECISION)
    activity_store.history_limit = config.get('history_limit', activity_store.history_limit)

    app.register_blueprint(converter_bp)
    app.register_blueprint(units_bp)
    app.register_blueprint(activity_bp)

    @app.route('/api/tools')
    def api_tools():
        return jsonify({'tools': get_enabled_tools(config, TOOLS)})

    @app.route('/health')
    def health():
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'tools_count': len(get_enabled_tools(config, TOOLS)),
            'activity_stats': activity_store.get_stats()
        })

    logger.debug("Registered %d tools", len(TOOLS))
    return app


app = create_app()
