"""
Configuration loader
TOML or YAML config file, string values may hold ${VAR} / ${VAR:default} environment placeholders
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import toml
import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "DAYBOOK_CONFIG_FILE"
USER_CONFIG_DIR = Path.home() / ".config" / "daybook"

_ENV_PLACEHOLDER = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

DEFAULT_CONFIG_TEMPLATE = """# Daybook configuration file
# ${{VAR}} and ${{VAR:default}} inside string values are replaced from the environment on load

[server]
host = "0.0.0.0"
port = 5000
debug = false
cors_origins = ["*"]

[database]
# The database name in the URI path wins over `name`
uri = "${{MONGODB_URI:mongodb://localhost:27017/daybook}}"
name = "daybook"

[auth]
# Single shared password; empty rejects every login
admin_password = "${{ADMIN_PASSWORD:}}"

[activities]
# Zone that decides which calendar day is "today" for new activities
timezone = "Asia/Kolkata"

[logging]
level = "INFO"
logs_dir = '{logs_dir}'
max_file_size = "10MB"
backup_count = 5
"""


def interpolate_env(text: str) -> str:
    """Substitute environment placeholders, missing variables fall back to their default"""
    return _ENV_PLACEHOLDER.sub(lambda m: os.getenv(m.group(1), m.group(2) or ""), text)


def interpolate_tree(node: Any) -> Any:
    """Apply ``interpolate_env`` to every string value of a parsed config.

    Runs after parsing so substituted values never go through the TOML/YAML
    parser; quotes and backslashes in secrets stay literal.
    """
    if isinstance(node, str):
        return interpolate_env(node)
    if isinstance(node, dict):
        return {key: interpolate_tree(value) for key, value in node.items()}
    if isinstance(node, list):
        return [interpolate_tree(value) for value in node]
    return node


def default_config_file() -> Path:
    override = os.getenv(CONFIG_FILE_ENV)
    if override:
        return Path(override)
    return USER_CONFIG_DIR / "config.toml"


class ConfigLoader:
    """Loads one config file and answers dot-path lookups"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = str(config_file or default_config_file())
        self._config: Dict[str, Any] = {}

    @property
    def path(self) -> Path:
        return Path(self.config_file)

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in (".yaml", ".yml")

    def load(self) -> Dict[str, Any]:
        """Read the file, writing the default template first when it is missing"""
        if not self.path.exists():
            self.write_default()

        text = self.path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(text) if self.is_yaml else toml.loads(text)
        except (yaml.YAMLError, toml.TomlDecodeError) as e:
            logger.error(f"Cannot parse configuration file {self.config_file}: {e}")
            raise

        self._config = interpolate_tree(parsed or {})
        logger.info(f"Configuration loaded: {self.config_file}")
        return self._config

    def write_default(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            DEFAULT_CONFIG_TEMPLATE.format(logs_dir=USER_CONFIG_DIR / "logs"),
            encoding="utf-8",
        )
        logger.info(f"Default configuration written to {self.config_file}")

    def get(self, key: str, default: Any = None) -> Any:
        """Look up ``section.key`` style paths"""
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def section(self, name: str) -> Dict[str, Any]:
        value = self.get(name, {})
        return value if isinstance(value, dict) else {}


_config_instance: Optional[ConfigLoader] = None


def get_config(config_file: Optional[str] = None) -> ConfigLoader:
    """Process-wide loader; passing a file replaces it"""
    global _config_instance
    if config_file is not None or _config_instance is None:
        _config_instance = ConfigLoader(config_file)
        _config_instance.load()
    return _config_instance
