"""
Service Marketplace Portal
Flask front end for the admin, vendor, customer and technician roles
"""
import logging
import os

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from portal.config.settings import PortalConfig
from portal.core import portal_logs, upstream_status
from portal.core.logs import install_ring_buffer
from portal.core.monitoring import UpstreamMonitor
from portal.routes.main_routes import main_bp

# Importing the component packages registers their init functions
from portal.components import registry
from portal.components import auth, admin, customer, vendor, technician  # noqa: F401
from portal.components import messaging, notifications, location  # noqa: F401
from portal.components import system_overview, system_logs  # noqa: F401

logger = logging.getLogger(__name__)


class PortalApp:
    """Main portal application class"""

    def __init__(self):
        self.app = None
        self.monitor = None

    def create_app(self, config_object=PortalConfig):
        """Create and configure Flask application"""
        template_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')
        self.app = Flask(__name__, template_folder=template_dir)

        # Load configuration
        self.app.config.from_object(config_object)

        logging.basicConfig(level=logging.INFO,
                            format='%(asctime)s %(levelname)s %(name)s: %(message)s')
        install_ring_buffer(portal_logs)

        # Initialize extensions
        Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URI'],
        )

        # Initialize monitoring
        self.monitor = UpstreamMonitor(
            self.app.config['API_HEALTH_URL'],
            interval=config_object.polling_seconds('upstream'),
            status_map=upstream_status,
        )
        self.app.extensions['upstream_monitor'] = self.monitor

        # Initialize components
        registry.init_app(self.app)

        # Register main blueprint
        self.app.register_blueprint(main_bp)

        if self.app.config['ENABLE_UPSTREAM_MONITOR']:
            self.monitor.start()

        logger.info(f"{self.app.config['APP_NAME']} portal created, API at {self.app.config['API_BASE_URL']}")
        return self.app

    def run(self, host='0.0.0.0', port=None):
        """Start the portal"""
        port = port or int(os.environ.get('PORTAL_PORT', 8081))
        logger.info(f'Starting portal on http://localhost:{port}')
        self.app.run(host=host, port=port, debug=False)


def create_app(config=None):
    """Application factory"""
    return PortalApp().create_app(config or PortalConfig)


def main():
    """Main entry point"""
    portal = PortalApp()
    portal.create_app()
    portal.run()


if __name__ == '__main__':
    main()
