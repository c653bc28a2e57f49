import logging
import os
from dotenv import load_dotenv


DEFAULT_CHANGELOG_URL = (
    "https://raw.githubusercontent.com/badlogic/pi-mono/main/packages/coding-agent/CHANGELOG.md"
)


class Config:
    def __init__(self) -> None:
        logging.debug("Loading configuration...")
        load_dotenv()
        self.changelog_url = os.getenv("CHANGELOG_URL", DEFAULT_CHANGELOG_URL).strip()
        self.install_dir = os.getenv("PI_INSTALL_DIR", ".").strip() or "."
        self.installed_version = os.getenv("PI_INSTALLED_VERSION", "").strip() or None
        self.fetch_timeout = float(os.getenv("CHANGELOG_FETCH_TIMEOUT", "30"))  # seconds
        self.log_level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()

        logging.debug(
            f"Loaded config: install_dir={self.install_dir}, installed_version={self.installed_version or 'UNSET'}, "
            f"fetch_timeout={self.fetch_timeout}"
        )

    def validate(self) -> None:
        problems = []
        if not self.changelog_url:
            problems.append("CHANGELOG_URL must not be empty")
        if self.fetch_timeout <= 0:
            problems.append("CHANGELOG_FETCH_TIMEOUT must be positive")
        if problems:
            logging.error(f"Invalid configuration: {'; '.join(problems)}")
            raise RuntimeError("Invalid configuration: " + "; ".join(problems))
        logging.debug("Configuration validation passed")
