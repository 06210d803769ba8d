"""
ZhCode config - loads the bundled language and target definitions
"""

import json
import os
from typing import Optional

from .errors import ConfigError

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')

LANGUAGE_SECTIONS = ('keywords', 'literals', 'quotes', 'escapes', 'punctuation', 'operators', 'jsx')


def _load_json(path: str) -> dict:
    if not os.path.exists(path):
        raise ConfigError(f"Could not find {os.path.relpath(path, DATA_DIR)}")
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {os.path.basename(path)}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{os.path.basename(path)} must contain a JSON object")
    return data


def load_language_config(path: Optional[str] = None) -> dict:
    """Load the language definition from data/zh.json"""
    config = _load_json(path or os.path.join(DATA_DIR, 'zh.json'))
    missing = [s for s in LANGUAGE_SECTIONS if s not in config]
    if missing:
        raise ConfigError(f"Language definition is missing sections: {', '.join(missing)}")
    return config


def load_target_config(target: str) -> dict:
    """Load target config from data/targets/{target}.json"""
    return _load_json(os.path.join(DATA_DIR, 'targets', f'{target}.json'))


# Load config at module level
ZH = load_language_config()
