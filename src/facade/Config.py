#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os
from pathlib import Path


class Config:
    """Process configuration for the facade package.

    Lookup order for config(key):
    1. Environment variable FACADE_<KEY> (upper case, '.' becomes '_')
    2. etc/facade/config.props under FACADE_HOME (or the working directory)
    3. The supplied default
    """

    _instance = None

    def __init__(self, home=None):
        self._home = Path(home) if home is not None else None
        self._props = None

    @staticmethod
    def cur():
        if Config._instance is None:
            Config._instance = Config()
        return Config._instance

    @staticmethod
    def reset(home=None):
        """Replace the current config, discarding cached props."""
        Config._instance = Config(home)
        return Config._instance

    def home_dir(self):
        if self._home is not None:
            return self._home
        home = os.environ.get("FACADE_HOME")
        if home:
            return Path(home)
        return Path.cwd()

    def props_file(self):
        return self.home_dir() / "etc" / "facade" / "config.props"

    def props(self):
        """Return the parsed config.props map (cached)"""
        if self._props is None:
            f = self.props_file()
            self._props = Config.read_props(f) if f.exists() else {}
        return self._props

    def config(self, key, def_val=None):
        """Lookup a config value by key"""
        env_key = "FACADE_" + key.upper().replace(".", "_")
        val = os.environ.get(env_key)
        if val is not None:
            return val

        val = self.props().get(key)
        if val is not None:
            return val

        return def_val

    def marker(self):
        """Name prefix flagging a member as internal"""
        return self.config("marker", "_")

    @staticmethod
    def read_props(path):
        """Parse a props file of key=value lines.

        Blank lines and lines starting with '#' or '//' are skipped.
        Whitespace around keys and values is trimmed.
        """
        props = {}
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or line.startswith("//"):
                    continue
                eq = line.find("=")
                if eq < 0:
                    continue
                props[line[:eq].strip()] = line[eq + 1:].strip()
        return props
