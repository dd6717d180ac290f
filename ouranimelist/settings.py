import copy
import logging
import os

import yaml

from ouranimelist.constants import CONFIG_FILE, DEFAULT_SETTINGS

# Retrieve main logger
logger = logging.getLogger("main")


MONITOR_SETTING_KEYS = ("enabled", "interval_seconds", "threshold")

# Cache variable
_cached_settings = None


def _merge_with_defaults(settings):
    # Deep merge with defaults so sections added later are always present
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in settings.items():
        if isinstance(values, dict) and section in merged_settings and isinstance(merged_settings[section], dict):
            merged_settings[section].update(values)
        else:
            merged_settings[section] = values
    return merged_settings


def load_settings(force=False, config_file=CONFIG_FILE):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}
        settings = _merge_with_defaults(settings)
    else:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        try:
            os.makedirs(os.path.dirname(config_file), exist_ok=True)
            with open(config_file, "w") as yaml_file:
                yaml.dump(settings, yaml_file)
        except OSError as e:
            logger.warning(f"Could not write default settings to {config_file}: {e}")

    _cached_settings = settings
    return settings


def verify_settings(section, data):
    success = True
    errors = []
    if section == "monitor":
        if not isinstance(data.get("enabled"), bool):
            success = False
            errors.append({"path": "monitor/enabled", "error": "Enabled must be true or false."})
        interval = data.get("interval_seconds")
        threshold = data.get("threshold")
        if not isinstance(interval, (int, float)) or interval <= 0:
            success = False
            errors.append({"path": "monitor/interval_seconds", "error": "Interval must be a positive number."})
        if not isinstance(threshold, int) or threshold < 1:
            success = False
            errors.append({"path": "monitor/threshold", "error": "Threshold must be an integer >= 1."})
    elif section == "pagination":
        default_size = data.get("default_page_size")
        max_size = data.get("max_page_size")
        if not isinstance(default_size, int) or not isinstance(max_size, int) or not 0 < default_size <= max_size:
            success = False
            errors.append({"path": "pagination", "error": "Expected 0 < default_page_size <= max_page_size."})
    return success, errors


def set_monitor_settings(data, config_file=CONFIG_FILE):
    settings = load_settings(config_file=config_file)
    candidate = dict(settings["monitor"])
    unknown = sorted(set(data) - set(MONITOR_SETTING_KEYS))
    if unknown:
        return False, [{"path": f"monitor/{key}", "error": "Unknown setting."} for key in unknown]
    candidate.update(data)
    success, errors = verify_settings("monitor", candidate)
    if not success:
        return success, errors
    settings["monitor"] = candidate
    with open(config_file, "w") as yaml_file:
        yaml.dump(settings, yaml_file)
    reload_conf(config_file=config_file)
    return success, errors


def reload_conf(config_file=CONFIG_FILE):
    """Reload application settings cache"""
    global _cached_settings
    _cached_settings = None
    return load_settings(force=True, config_file=config_file)
