import logging
from datetime import datetime
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from .api.store import ToolDataStore
from .blueprints.converter import converter_bp
from .blueprints.encoders import encoders_bp
from .blueprints.formatters import formatters_bp
from .blueprints.generators import generators_bp
from .blueprints.regex import regex_bp
from .blueprints.text_diff import text_diff_bp
from .blueprints.user_data import user_data_bp
from .config.settings import get_enabled_tools, load_config
from .config.tools import TOOLS
from .utils.request_helpers import CONFIG_KEY, STORE_EXTENSION, get_settings, get_store

logger = logging.getLogger(__name__)

BLUEPRINTS = [
    encoders_bp,
    formatters_bp,
    generators_bp,
    regex_bp,
    converter_bp,
    text_diff_bp,
    user_data_bp,
]


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask application with every tool blueprint registered."""
    settings = config if config is not None else load_config()

    app = Flask(__name__)
    app.config[CONFIG_KEY] = settings
    app.extensions[STORE_EXTENSION] = ToolDataStore(settings)

    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    @app.route('/api/tools')
    def api_tools():
        return jsonify({'tools': get_enabled_tools(get_settings(), TOOLS)})

    @app.route('/health')
    def health():
        store = get_store()
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'tools_count': len(get_enabled_tools(get_settings(), TOOLS)),
            'users_count': len(set(store.saved_data) | set(store.favorites) | set(store.usage))
        })

    logger.debug("Registered %d blueprints", len(BLUEPRINTS))
    return app


app = create_app()
