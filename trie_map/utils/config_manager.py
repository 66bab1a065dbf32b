# config_manager.py - JSON config for the trie-map shell

import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULTS = {
    "max_results": 20,     # rows shown for completions/values
    "show_values": True,   # completions table includes stored values
    "log_level": "WARNING",
}


class Config:
    def __init__(self, path="trie_map_config.json"):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    self.data.update(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("could not read config %s: %s", self.path, e)
        else:
            self.save()

    def save(self):
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key):
        return self.data.get(key, DEFAULTS.get(key))

    def rows(self):
        """(option, value) pairs for display."""
        return [(k, str(v)) for k, v in self.data.items()]

    def set(self, key, val):
        """Set an option, coercing to the default's type. False if unknown/invalid."""
        if key not in DEFAULTS:
            logger.warning("no such option: %s", key)
            return False
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            val = val.strip().lower() in ("1", "true", "yes", "on")
        else:
            try:
                val = kind(val)
            except (TypeError, ValueError):
                logger.warning("bad value for %s: %r", key, val)
                return False
        self.data[key] = val
        self.save()
        return True
