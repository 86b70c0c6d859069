"""
Command line launcher for the devtools-hub server.
"""

import argparse
import logging

from .config.settings import get_config_directory, load_config

logger = logging.getLogger(__name__)


def write_port_file(port):
    """Write the port number to .port file for other processes to read."""
    config_dir = get_config_directory()
    config_dir.mkdir(parents=True, exist_ok=True)
    port_file = config_dir / ".port"
    with open(port_file, 'w') as f:
        f.write(str(port))
    logger.info("Port %s written to %s", port, port_file)


def cleanup_port_file():
    """Remove the .port file on shutdown."""
    port_file = get_config_directory() / ".port"
    if port_file.exists():
        port_file.unlink()
        logger.info("Port file cleaned up")


def configure_logging(level_name: str):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description='devtools-hub server')
    parser.add_argument('--port', '-p', type=int, default=8000,
                        help='Port to run the server on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                        help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--debug', action='store_true',
                        help='Run Flask in debug mode')
    args = parser.parse_args(argv)

    config = load_config()
    configure_logging(config.get('log_level', 'INFO'))

    # Imported late so logging is configured before the app is built
    from .main import create_app
    app = create_app(config)

    write_port_file(args.port)
    try:
        logger.info("Starting devtools-hub on http://%s:%s", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        cleanup_port_file()


if __name__ == '__main__':
    main()
