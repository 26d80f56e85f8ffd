from .load import config_path, load_config
from .model import ConfigValueError, ProjectConfig, parse_file_mode

__all__ = ["config_path", "load_config", "ConfigValueError", "ProjectConfig", "parse_file_mode"]
