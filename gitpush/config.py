import os
import json
import logging

from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger("gitpush.config")

PROVIDERS = ('gemini', 'openai', 'anthropic', 'github')
CONFIG_DIR_ENV = 'GITPUSH_CONFIG_DIR'


def default_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / '.gitpush'


class ConfigStore:
    """Flat JSON document holding the AI provider, its API key and the setup flag.

    Every read goes back to disk and every save overwrites the whole file.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self.config_file = self.config_dir / 'config.json'

    @property
    def config_path(self) -> str:
        return str(self.config_file)

    def get_config(self) -> Dict[str, Any]:
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.debug("Ignoring non-object config in %s", self.config_file)
        except (OSError, ValueError) as e:
            logger.debug("Could not load config from %s: %s", self.config_file, e)
        return {}

    def save_config(self, config: Dict[str, Any]) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2)

    def get_api_key(self) -> Optional[str]:
        return self.get_config().get('apiKey')

    def get_ai_provider(self) -> Optional[str]:
        return self.get_config().get('aiProvider')

    def set_api_key(self, provider: str, api_key: str) -> None:
        config = self.get_config()
        config['aiProvider'] = provider
        config['apiKey'] = api_key
        config['setupComplete'] = True
        self.save_config(config)

    def is_setup_complete(self) -> bool:
        config = self.get_config()
        return (
            config.get('setupComplete') is True
            and bool(config.get('apiKey'))
            and bool(config.get('aiProvider'))
        )

    def clear_config(self) -> bool:
        """Delete the config file. Returns False when there was nothing to clear."""
        if not self.config_file.exists():
            return False
        try:
            self.config_file.unlink()
        except OSError as e:
            logger.debug("Could not remove %s: %s", self.config_file, e)
            return False
        return True
