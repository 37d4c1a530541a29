import logging
from .config import server

logging.basicConfig(
    level=server.log_level.upper(),
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
)

def get_logger(name: str = 'leaderboard_api') -> logging.Logger:
    """Return a logger under the service namespace"""
    return logging.getLogger(name)
