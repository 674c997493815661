"""Environment settings for the bill scanner.

Values come from the process environment, with a ``.env`` file loaded first
(same as running the app locally with ``streamlit run app.py``).
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from billscanner.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".billscanner" / "config.json"
DEFAULT_API_VERSION = "2024-08-01-preview"
DEFAULT_SOURCE_TAG = "BillScannerApp"


def _float_setting(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        azure_endpoint: Azure OpenAI endpoint URL.
        azure_api_key: Azure OpenAI key. When empty the demo analyzer is used.
        azure_deployment: Name of the vision-capable chat deployment.
        azure_api_version: API version; structured output needs 2024-08-01 or later.
        config_path: JSON file holding the saved webhook URL.
        note_language: Language the model writes the receipt note in.
        source_tag: Value of the ``source`` field sent with every webhook row.
        webhook_timeout: Seconds to wait on the webhook, None waits forever.
        demo_delay: Simulated scan time of the demo analyzer.
        local_save_delay: Simulated save time when no webhook is configured.
        success_delay: How long the success state is shown before the form resets.
        log_level: Loguru level name.
        log_file: Optional rotating log file.
    """

    azure_endpoint: Optional[str] = None
    azure_api_key: Optional[str] = None
    azure_deployment: Optional[str] = None
    azure_api_version: str = DEFAULT_API_VERSION
    config_path: Path = DEFAULT_CONFIG_PATH
    note_language: str = "Thai"
    source_tag: str = DEFAULT_SOURCE_TAG
    webhook_timeout: Optional[float] = None
    demo_delay: float = 2.5
    local_save_delay: float = 1.0
    success_delay: float = 1.5
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.azure_api_key)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        if env is None:
            load_dotenv()
            env = os.environ

        config_path = env.get("BILLSCANNER_CONFIG_PATH")
        return cls(
            azure_endpoint=env.get("AZURE_OPENAI_ENDPOINT"),
            azure_api_key=env.get("AZURE_OPENAI_KEY"),
            azure_deployment=env.get("AZURE_OPENAI_DEPLOYMENT"),
            azure_api_version=env.get("AZURE_OPENAI_API_VERSION", DEFAULT_API_VERSION),
            config_path=Path(config_path).expanduser() if config_path else DEFAULT_CONFIG_PATH,
            note_language=env.get("BILLSCANNER_NOTE_LANGUAGE", "Thai"),
            source_tag=env.get("BILLSCANNER_SOURCE_TAG", DEFAULT_SOURCE_TAG),
            webhook_timeout=_float_setting(env, "BILLSCANNER_WEBHOOK_TIMEOUT", None),
            demo_delay=_float_setting(env, "BILLSCANNER_DEMO_DELAY", 2.5),
            local_save_delay=_float_setting(env, "BILLSCANNER_LOCAL_SAVE_DELAY", 1.0),
            success_delay=_float_setting(env, "BILLSCANNER_SUCCESS_DELAY", 1.5),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE") or None,
        )
