import os
import yaml
from waterinsights.core.domain.settings import SystemSettings

# Environment variable -> settings field
ENV_OVERRIDES = {
    "DATA_SERVICE_URL": "data_service_url",
    "DATA_SERVICE_TOKEN": "data_service_token",
    "DATA_SERVICE_TIMEOUT": "data_service_timeout",
    "WI_THRESHOLDS_FILE": "thresholds_file",
    "WI_TIMEZONE": "timezone",
    "WI_LOG_LEVEL": "log_level",
}

def load_settings(path: str | None = None) -> SystemSettings:
    """
    Load system settings from a YAML file.
    Environment variables take precedence over the file.

    Args:
        path: Path to config.yaml. Defaults to WI_CONFIG_FILE env var or "config.yaml".
    """
    if path is None:
        path = os.getenv("WI_CONFIG_FILE", "config.yaml")

    config_data = {}

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except Exception as e:
            raise RuntimeError(f"Failed to load configuration from {path}: {e}")

    for env_var, field_name in ENV_OVERRIDES.items():
        if os.getenv(env_var):
            config_data[field_name] = os.getenv(env_var)

    return SystemSettings(**config_data)
