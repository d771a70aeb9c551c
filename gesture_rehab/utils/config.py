"""
Application configuration.

``config/config.yaml`` is layered over the built-in DEFAULTS, then any
overrides given to ``load()`` are layered on top. Every leaf in DEFAULTS
also fixes the type a value must have; values of another type are kept but
reported as warnings.

    config = Config().load()
    config.get("matching.tolerance")   # 2
    config.matching                    # {"tolerance": 2, "max_strikes": 2}
"""

import os
import copy
import logging

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

DEFAULTS = {
    "sampling": {"frequency_hz": 10},
    "quantization": {"scale": 18},
    "matching": {"tolerance": 2, "max_strikes": 2},
    "controls": {"confirm_pose": "double_tap", "cancel_pose": "wave_out"},
    "device": {
        "application_id": "com.example.gesture-rehab",
        "connect_timeout_ms": 10000,
        "sdk_path": None,
    },
    "exercise": {"default_reps": 5},
    "logging": {"level": "INFO", "file": None, "max_size_mb": 10, "backup_count": 3},
}


def merge_layers(lower: dict, upper: dict) -> dict:
    """Nested dict merge where ``upper`` wins; neither input is modified."""
    result = copy.deepcopy(lower)
    for key, value in upper.items():
        below = result.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            result[key] = merge_layers(below, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def check_types(data: dict, reference: dict = DEFAULTS, prefix: str = "") -> list:
    """Compare ``data`` against the value types in ``reference``.

    None in ``reference`` means any type is allowed. Booleans never pass
    for ints.
    """
    problems = []
    for key, expected in reference.items():
        path = prefix + key
        if key not in data:
            continue
        value = data[key]
        if isinstance(expected, dict):
            if isinstance(value, dict):
                problems.extend(check_types(value, expected, path + "."))
            else:
                problems.append(f"'{path}' must be a mapping, got {type(value).__name__}")
        elif expected is not None and value is not None:
            wanted = type(expected)
            if isinstance(value, bool) != isinstance(expected, bool) or not isinstance(value, wanted):
                problems.append(f"{path}: expected {wanted.__name__}, got {value!r}")
    return problems


class Config:
    """Process-wide configuration (singleton)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._data = copy.deepcopy(DEFAULTS)
            instance._source = None
            cls._instance = instance
        return cls._instance

    def load(self, config_path: str = None, overrides: dict = None) -> "Config":
        """Read the YAML file and apply ``overrides``. Returns self."""
        path = config_path or DEFAULT_CONFIG_PATH
        file_data = {}
        try:
            with open(path, "r") as f:
                file_data = yaml.safe_load(f) or {}
            if not isinstance(file_data, dict):
                logger.warning("Config %s is not a mapping (got %s); built-in defaults apply",
                               path, type(file_data).__name__)
                file_data = {}
            self._source = path
            logger.info("Configuration read from %s", path)
        except FileNotFoundError:
            self._source = None
            logger.warning("No config file at %s; built-in defaults apply", path)

        self._data = merge_layers(DEFAULTS, file_data)
        if overrides:
            self._data = merge_layers(self._data, overrides)

        for problem in self.problems():
            logger.warning("Config: %s", problem)
        return self

    def problems(self) -> list:
        """Type and range problems in the loaded values, as readable strings."""
        problems = check_types(self._data)
        frequency = self.get("sampling.frequency_hz")
        if isinstance(frequency, int) and frequency <= 0:
            problems.append(f"sampling.frequency_hz must be positive, got {frequency}")
        return problems

    def get(self, dotted: str, default=None):
        """Look up ``"section.key"``; ``default`` when any part is missing."""
        node = self._data
        for part in dotted.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_section(self, section: str) -> dict:
        value = self._data.get(section)
        return value if isinstance(value, dict) else {}

    @property
    def source_path(self):
        """File the values came from, or None when only defaults apply."""
        return self._source

    @property
    def sampling(self) -> dict:
        return self.get_section("sampling")

    @property
    def quantization(self) -> dict:
        return self.get_section("quantization")

    @property
    def matching(self) -> dict:
        return self.get_section("matching")

    @property
    def controls(self) -> dict:
        return self.get_section("controls")

    @property
    def device(self) -> dict:
        return self.get_section("device")

    @property
    def exercise(self) -> dict:
        return self.get_section("exercise")

    @property
    def base_dir(self) -> str:
        return PROJECT_ROOT

    @classmethod
    def reset(cls):
        """Forget the loaded configuration (used by tests)."""
        cls._instance = None
