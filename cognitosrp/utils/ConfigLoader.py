#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import yaml
from pathlib import Path
from copy import deepcopy

# GLOBALS
_config = None

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "etc" / "config.yaml"
OVERLAY_ENV_VAR = "COGNITOSRP_CONFIG"


def _merge_dicts(base: dict, override: dict) -> dict:
    """
    Shallow+nested merge: values in override win; dict values are merged recursively.
    """
    result = deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _merge_dicts(result[k], v)
        else:
            result[k] = deepcopy(v)
    return result


def _read_yaml(filepath) -> dict:
    try:
        with open(filepath, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        raise RuntimeError(f"Configuration file not found at {filepath}.")
    except yaml.YAMLError as e:
        raise RuntimeError(f"Error parsing YAML file: {e}")

    if not isinstance(data, dict):
        raise RuntimeError(f"Configuration file {filepath} must contain a mapping.")
    return data


class ConfigLoader:
    @staticmethod
    def get_config() -> dict:
        """
        Returns the cached configuration, loading it on first use.
        """
        global _config
        if _config is None:
            _config = ConfigLoader.load_config()
        return _config

    @staticmethod
    def load_config(filepath: str | None = None, overlay: str | None = None) -> dict:
        """
        Loads the configuration file if not already cached.

        The packaged etc/config.yaml is the base unless filepath is given.
        An overlay file (argument, or the COGNITOSRP_CONFIG environment
        variable) is merged on top of it.
        """
        global _config

        if _config is None:
            base_cfg = _read_yaml(filepath or DEFAULT_CONFIG_PATH)

            overlay = overlay or os.environ.get(OVERLAY_ENV_VAR)
            if overlay:
                base_cfg = _merge_dicts(base_cfg, _read_yaml(overlay))

            _config = base_cfg

        return _config

    @staticmethod
    def reload_config(filepath: str | None = None, overlay: str | None = None) -> dict:
        """
        Reload the configuration from disk.

        Returns:
            dict: The reloaded configuration dictionary.
        """

        global _config
        _config = None

        return ConfigLoader.load_config(filepath, overlay)
