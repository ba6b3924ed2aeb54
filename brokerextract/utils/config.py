# brokerextract/utils/config.py
import os

import yaml
from dotenv import load_dotenv

# Define the base directory (root of the project)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Common configuration
COMMON_CONFIG = {
    "input_dir": os.path.join(BASE_DIR, "data", "input"),
    "output_dir": os.path.join(BASE_DIR, "data", "output"),
    "log_level": "INFO",
}

# Environment variables that override the config file
ENV_OVERRIDES = {
    "BROKEREXTRACT_INPUT_DIR": "input_dir",
    "BROKEREXTRACT_OUTPUT_DIR": "output_dir",
    "BROKEREXTRACT_LOG_LEVEL": "log_level",
}

CONFIG_FILE_ENV = "BROKEREXTRACT_CONFIG"


def load_config_file(path):
    """Load a YAML config file; a missing or empty file yields {}."""
    if not path or not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def get_config(config_path=None):
    """
    Return the merged configuration: defaults, then the YAML file, then the
    environment (a .env file in the working directory is loaded first).
    """
    load_dotenv()
    config = dict(COMMON_CONFIG)
    config.update(load_config_file(config_path or os.getenv(CONFIG_FILE_ENV)))
    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value
    config["log_level"] = str(config["log_level"]).upper()
    return config
