"""Client orchestration layer for ledgerbalances."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ledgerbalances.backend import HttpMetadataBackend, MetadataBackend
from ledgerbalances.book import Book
from ledgerbalances.exceptions import SnapshotError
from ledgerbalances.report import BalancesReport

# Configure logging
logger = logging.getLogger("ledgerbalances")
log_level = os.environ.get('LOGGING_LEVEL', 'INFO').upper()
logger.setLevel(getattr(logging, log_level, logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    logger.addHandler(handler)

CONFIG_ENV_VAR = "LEDGERBALANCES_CONFIG"
DEFAULT_CONFIG_DIR = ".ledgerbalances"
DEFAULT_CONFIG_NAME = "config.json"


class BalancesClient:
    """Load balances snapshots into reports bound to a configured book."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        book: Book | None = None,
        backend: MetadataBackend | None = None,
    ) -> None:
        """Initialize the client from a config file.

        Args:
            config_path: Path to the JSON config file, defaults to the
                LEDGERBALANCES_CONFIG variable or ~/.ledgerbalances/config.json
            book: Optional book overriding the configured book settings
            backend: Optional metadata backend overriding the configured API
        """
        self.config_path = self._resolve_config_path(config_path)
        self.config = self._load_config()
        self.backend = backend or self._build_backend()
        self.book = book or Book(self.config.get("book") or {}, backend=self.backend)

    def _resolve_config_path(self, config_path: str | Path | None) -> Path:
        """Resolve the config path from arguments or environment."""
        if config_path is not None:
            return Path(config_path)
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        return Path.home() / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_NAME

    def _load_config(self) -> dict:
        """Load config file if present, else return empty config."""
        if not self.config_path.exists():
            logger.debug(f"No config file at {self.config_path}")
            return {}
        try:
            with self.config_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring invalid config file {self.config_path}")
            return {}
        if not isinstance(payload, dict):
            return {}
        return payload

    def _build_backend(self) -> MetadataBackend | None:
        """Build the HTTP metadata backend when an API is configured."""
        api = self.config.get("api")
        if not isinstance(api, dict) or not api.get("base_url"):
            return None
        return HttpMetadataBackend(api)

    def load_report(self, snapshot_path: str | Path) -> BalancesReport:
        """Read a JSON balances snapshot file into a report.

        Raises:
            SnapshotError: If the file is missing or not a JSON object.
        """
        path = Path(snapshot_path)
        if not path.exists():
            raise SnapshotError(f"Snapshot file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Snapshot file is not valid JSON: {path}") from exc
        if not isinstance(payload, dict):
            raise SnapshotError(f"Snapshot must be a JSON object: {path}")
        logger.debug(f"Loaded snapshot {path}")
        return self.report_from_payload(payload)

    def report_from_payload(self, payload: dict[str, Any]) -> BalancesReport:
        """Wrap an already fetched balances payload into a report."""
        return BalancesReport(self.book, payload)
