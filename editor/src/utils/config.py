"""Settings file persistence for editing sessions"""

import os
import json
import logging

from models.view_settings import ViewSettings
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)


def load_settings(config_file):
    """Load ViewSettings from a JSON config file

    A missing file yields default settings.

    Raises:
        ValueError: If the file holds malformed settings
        OSError / json.JSONDecodeError: If the file cannot be read or parsed
    """
    try:
        if not os.path.exists(config_file):
            logger.debug(f"No settings file at {config_file}, using defaults")
            return ViewSettings.default()
        with open(config_file, 'r', encoding='utf-8') as f:
            config = json.load(f)
        return ViewSettings.from_dict(config)
    except Exception as e:
        loggerRaise(e, f"Error loading settings from {config_file}")


def save_settings(settings, config_file):
    """Save ViewSettings to a JSON config file, creating its directory"""
    try:
        config_dir = os.path.dirname(os.path.abspath(config_file))
        os.makedirs(config_dir, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.debug(f"Saved settings to {config_file}")
    except Exception as e:
        loggerRaise(e, f"Error saving settings to {config_file}")
