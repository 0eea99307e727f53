"""
Configuration system for importlens

Provides configuration management with support for files and environment variables.
Includes validation, default value handling, and configuration merging.
"""

import os
import json
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any
import logging

from importlens.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ["xlsx", "json"]


class ConfigurationManager:
    """Manages configuration loading, validation, and merging."""

    DEFAULT_CONFIG_PATHS = [
        "importlens.yaml",
        "importlens.yml",
        "importlens.json",
        ".importlens.yaml",
        ".importlens.yml",
        ".importlens.json",
        os.path.expanduser("~/.importlens.yaml"),
        os.path.expanduser("~/.importlens.json"),
    ]

    @staticmethod
    def find_config_file(search_paths: Optional[List[str]] = None) -> Optional[str]:
        """Find the first existing configuration file."""
        paths = search_paths or ConfigurationManager.DEFAULT_CONFIG_PATHS

        for path in paths:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

        # An empty YAML section (`analysis:`) loads as None
        for section in ("analysis", "output"):
            if section in data and data[section] is None:
                data[section] = {}
        return data

    @staticmethod
    def load_env_config() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        # Analysis settings
        analysis = {}
        if os.getenv("IMPORTLENS_EXTENSIONS"):
            analysis["extensions"] = [
                ext.strip() for ext in os.getenv("IMPORTLENS_EXTENSIONS").split(",") if ext.strip()
            ]

        if os.getenv("IMPORTLENS_EXCLUDE_DIRS"):
            analysis["exclude_dirs"] = [
                d.strip() for d in os.getenv("IMPORTLENS_EXCLUDE_DIRS").split(",") if d.strip()
            ]

        if os.getenv("IMPORTLENS_MAX_WORKERS"):
            try:
                analysis["max_workers"] = int(os.getenv("IMPORTLENS_MAX_WORKERS"))
            except ValueError:
                logger.warning("Invalid IMPORTLENS_MAX_WORKERS value, using default")

        if os.getenv("IMPORTLENS_PARSE_TIMEOUT"):
            try:
                analysis["parse_timeout"] = float(os.getenv("IMPORTLENS_PARSE_TIMEOUT"))
            except ValueError:
                logger.warning("Invalid IMPORTLENS_PARSE_TIMEOUT value, using default")

        if analysis:
            config["analysis"] = analysis

        # Output settings
        output = {}
        if os.getenv("IMPORTLENS_OUTPUT_DIR"):
            output["directory"] = os.getenv("IMPORTLENS_OUTPUT_DIR")

        if os.getenv("IMPORTLENS_TITLE"):
            output["title"] = os.getenv("IMPORTLENS_TITLE")

        if os.getenv("IMPORTLENS_FORMAT"):
            output_format = os.getenv("IMPORTLENS_FORMAT").lower()
            if output_format in SUPPORTED_FORMATS:
                output["format"] = output_format
            else:
                logger.warning("Invalid IMPORTLENS_FORMAT value, using default")

        if output:
            config["output"] = output

        return config

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries, with later ones taking precedence."""
        result = {}

        for config in configs:
            if not config:
                continue

            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = ConfigurationManager.merge_configs(result[key], value)
                else:
                    result[key] = value

        return result

    @staticmethod
    def validate_config(config_data: Dict[str, Any]) -> None:
        """Validate configuration data."""
        for section in ("analysis", "output"):
            if section in config_data and not isinstance(config_data[section], dict):
                raise ConfigurationError(f"{section} must be a mapping")

        if "analysis" in config_data:
            analysis = config_data["analysis"]

            if "extensions" in analysis:
                extensions = analysis["extensions"]
                if not isinstance(extensions, list) or not extensions:
                    raise ConfigurationError("extensions must be a non-empty list")
                if not all(isinstance(ext, str) and ext.strip(".").strip() for ext in extensions):
                    raise ConfigurationError("extensions must contain non-empty strings")

            if "exclude_dirs" in analysis and not isinstance(analysis["exclude_dirs"], list):
                raise ConfigurationError("exclude_dirs must be a list")

            max_workers = analysis.get("max_workers")
            if max_workers is not None and (not isinstance(max_workers, int) or max_workers <= 0):
                raise ConfigurationError("max_workers must be a positive integer")

            timeout = analysis.get("parse_timeout")
            if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
                raise ConfigurationError("parse_timeout must be a positive number of seconds")

        if "output" in config_data:
            output = config_data["output"]

            if "format" in output and output["format"] not in SUPPORTED_FORMATS:
                raise ConfigurationError(f"format must be one of: {SUPPORTED_FORMATS}")

            if "directory" in output and not str(output["directory"]).strip():
                raise ConfigurationError("directory must not be empty")


@dataclass
class AnalysisConfig:
    """Configuration for analysis operations."""

    extensions: List[str] = field(default_factory=lambda: ["java"])
    exclude_dirs: List[str] = field(
        default_factory=lambda: [".git", ".hg", ".svn", ".idea", ".gradle"]
    )
    max_workers: Optional[int] = None
    parse_timeout: Optional[float] = None  # seconds per file


@dataclass
class OutputConfig:
    """Configuration for report output."""

    directory: str = "analysis-results"
    title: str = "Import Analysis Results"
    format: str = "xlsx"


@dataclass
class ImportLensConfig:
    """Main configuration class for importlens."""

    analysis_settings: AnalysisConfig = field(default_factory=AnalysisConfig)
    output_settings: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def default(cls) -> "ImportLensConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        use_env: bool = True,
        validate: bool = True,
    ) -> "ImportLensConfig":
        """
        Load configuration from multiple sources with precedence:
        1. Default values
        2. Configuration file
        3. Environment variables (if use_env=True)

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            use_env: Whether to load environment variables
            validate: Whether to validate the configuration
        """
        configs_to_merge = []

        file_config = {}
        if config_path:
            file_config = ConfigurationManager.load_config_file(config_path)
        else:
            found_config = ConfigurationManager.find_config_file()
            if found_config:
                file_config = ConfigurationManager.load_config_file(found_config)
                logger.info(f"Loaded configuration from: {found_config}")

        configs_to_merge.append(file_config)

        if use_env:
            configs_to_merge.append(ConfigurationManager.load_env_config())

        merged_config = ConfigurationManager.merge_configs(*configs_to_merge)

        if validate:
            ConfigurationManager.validate_config(merged_config)

        analysis_config = AnalysisConfig()
        for key, value in merged_config.get("analysis", {}).items():
            if hasattr(analysis_config, key):
                setattr(analysis_config, key, value)

        output_config = OutputConfig()
        for key, value in merged_config.get("output", {}).items():
            if hasattr(output_config, key):
                setattr(output_config, key, value)

        return cls(analysis_settings=analysis_config, output_settings=output_config)

    @classmethod
    def from_file(cls, config_path: str) -> "ImportLensConfig":
        """Load configuration from a JSON or YAML file, ignoring the environment."""
        return cls.load(config_path=config_path, use_env=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "analysis": asdict(self.analysis_settings),
            "output": asdict(self.output_settings),
        }

    def to_file(self, config_path: str, format: str = "json") -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration
            format: File format ('json' or 'yaml')
        """
        config_data = self.to_dict()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                if format.lower() == "yaml":
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
                else:
                    json.dump(config_data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration file: {e}") from e

    def validate(self) -> None:
        """Validate the current configuration."""
        ConfigurationManager.validate_config(self.to_dict())

    def get_config_summary(self) -> str:
        """Get a human-readable summary of the configuration."""
        analysis = self.analysis_settings
        output = self.output_settings
        return f"""importlens Configuration Summary:
Analysis:
  - Extensions: {', '.join(analysis.extensions)}
  - Excluded directories: {len(analysis.exclude_dirs)} directories
  - Max workers: {analysis.max_workers or 'auto'}
  - Parse timeout: {f'{analysis.parse_timeout}s' if analysis.parse_timeout else 'none'}

Output:
  - Directory: {output.directory}
  - Title: {output.title}
  - Format: {output.format}
"""


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> ImportLensConfig:
    """
    Load configuration from file and/or environment variables.

    Args:
        config_path: Path to configuration file
        use_env: Whether to load environment variables

    Returns:
        ImportLensConfig: Loaded configuration
    """
    return ImportLensConfig.load(config_path=config_path, use_env=use_env)
