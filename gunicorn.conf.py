"""
Gunicorn configuration for CardParty application.
Optimized for Socket.IO with eventlet workers.
"""

import sys
import logging
import yaml
from src.card_source import CardPack, ContentValidationError

from config_factory import load_config

# Load configuration (renamed to avoid conflicts with gunicorn's internal 'config')
app_config = load_config()


def on_starting(server):
    """
    Server hook that runs when the master process is starting.
    Validates the card pack before workers are forked; a broken pack stops the server.
    """
    logger = logging.getLogger(__name__)
    logger.info(f"Validating {app_config.cards_file} before starting workers...")
    try:
        pack = CardPack.from_yaml(app_config.cards_file)
        if len(pack.white) < app_config.hand_size:
            raise ContentValidationError(
                f"Card pack has {len(pack.white)} white cards, fewer than one hand of {app_config.hand_size}"
            )
        logger.info(f"Successfully validated {len(pack.black)} black and {len(pack.white)} white cards.")
    except (FileNotFoundError, yaml.YAMLError, ContentValidationError) as e:
        logger.critical(f"FATAL: Card pack validation failed. Server shutting down. Error: {e}")
        sys.exit(1)


# Server socket
bind = f"{app_config.host}:{app_config.port}"
backlog = 2048

# Worker processes
workers = 1  # Must be 1 for Socket.IO with eventlet; scale out with processes sharing the Redis queue
worker_class = "eventlet"
worker_connections = app_config.worker_connections
timeout = app_config.timeout
keepalive = app_config.keepalive

# Restart workers after this many requests, to help prevent memory leaks
max_requests = 2000
max_requests_jitter = 100

# Logging
accesslog = "-"
errorlog = "-"
loglevel = app_config.log_level
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "cardparty"

# Server mechanics
preload_app = False  # Don't preload for Socket.IO
daemon = False
