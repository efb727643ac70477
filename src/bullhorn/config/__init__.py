"""Configuration: config manager and subscription topic."""

from bullhorn.config.config_manager import config_dir, load_config
from bullhorn.config.topic import display_subscription_qr, get_subscription_topic

__all__ = [
    "config_dir",
    "load_config",
    "display_subscription_qr",
    "get_subscription_topic",
]
