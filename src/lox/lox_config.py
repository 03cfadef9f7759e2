"""
Configuration management for the Lox interpreter.
"""

import os
from dataclasses import dataclass, fields

import yaml


@dataclass
class LoxConfig:
    """Tunable limits and interactive settings for a Lox session."""

    max_nesting: int = 64
    max_depth: int = 200
    prompt: str = "> "

    def __post_init__(self) -> None:
        for name in ("max_nesting", "max_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        if not isinstance(self.prompt, str):
            raise ValueError(f"prompt must be a string, got {self.prompt!r}")

    @classmethod
    def load_from_file(cls, config_path: str) -> 'LoxConfig':
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to a YAML mapping of setting names to values

        Returns:
            Configuration with defaults for any setting the file omits

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a mapping, names an unknown setting, or has an invalid value
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)

            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e

        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration settings: {', '.join(unknown)}")

        return cls(**data)
