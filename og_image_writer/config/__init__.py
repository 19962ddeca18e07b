"""Loading of the writer configuration.

The layering is as follows, with later sources overriding earlier ones:

1.  Default values defined in the Pydantic schemas.
2.  Values from the YAML configuration file.
3.  Values from environment variables (prefixed with `OG_IMAGE_WRITER_`) or a `.env` file.
"""

from pathlib import Path

import yaml

from og_image_writer.config.schemas import WriterSettings


def _merge(base, override):
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path=None) -> WriterSettings:
    """Loads a YAML configuration file and merges it with environment variables.

    Args:
        config_path (str | Path, optional): The YAML file. Without it only
            defaults and the environment are used.

    Returns:
        A validated `WriterSettings` object.
    """
    config_dict = {}
    if config_path is not None:
        with open(Path(config_path), "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

    # `exclude_unset=True` keeps only the fields that were explicitly set,
    # i.e. those coming from the environment
    env_settings = WriterSettings()
    merged = _merge(config_dict, env_settings.model_dump(exclude_unset=True))
    return WriterSettings.model_validate(merged)
