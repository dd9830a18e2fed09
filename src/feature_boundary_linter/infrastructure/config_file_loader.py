"""Load the feature_boundary: section of analysis_options.yaml. Infrastructure I/O only."""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "analysis_options.yaml"
CONFIG_SECTION = "feature_boundary"


class ConfigFileLoader:
    """
    Loads config from analysis_options.yaml, walking up from the working directory.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the feature_boundary section of the nearest analysis_options.yaml, or {}."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / CONFIG_FILE_NAME
            if not config_file.is_file():
                continue
            try:
                with config_file.open(encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as exc:
                logger.warning("Could not read %s: %s", config_file, exc)
                return {}
            if not isinstance(data, dict):
                return {}
            section = data.get(CONFIG_SECTION) or {}
            if not isinstance(section, dict):
                logger.warning("Ignoring non-mapping '%s' section in %s", CONFIG_SECTION, config_file)
                return {}
            logger.debug("Loaded configuration from %s", config_file)
            return section
        return {}
