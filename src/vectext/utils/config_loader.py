import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path

CONFIG_DIR_ENV = "VECTEXT_CONFIG_DIR"
DEFAULT_CONFIG_DIR = "configs"


class ConfigLoader:
    """
    Loads YAML configuration files from a directory.

    `features_config.yaml` is available as the 'features' config; values are
    looked up with dotted keys, e.g. get("features.vectorizer.type").
    The directory defaults to $VECTEXT_CONFIG_DIR, then ./configs.
    """

    def __init__(self, config_dir: Optional[str] = None):
        self.config_dir = Path(config_dir or os.environ.get(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))
        self.configs: Dict[str, Any] = {}

    def load_all(self) -> Dict[str, Any]:
        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Config directory not found: {self.config_dir}")

        for config_file in sorted(self.config_dir.glob("*.yaml")):
            self.configs[self.config_name(config_file)] = self.load_yaml(config_file)

        return self.configs

    def load(self, name: str) -> Dict[str, Any]:
        """Load only `<name>_config.yaml` (or `<name>.yaml`)."""
        for candidate in (f"{name}_config.yaml", f"{name}.yaml"):
            path = self.config_dir / candidate
            if path.exists():
                self.configs[name] = self.load_yaml(path)
                return self.configs[name]
        raise FileNotFoundError(f"No '{name}' config in {self.config_dir}")

    def get(self, key: str, default: Any = None) -> Any:
        value = self.configs

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @staticmethod
    def config_name(path: Path) -> str:
        return path.stem.replace("_config", "")

    @staticmethod
    def load_yaml(file_path: Path) -> Dict[str, Any]:
        with open(file_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
