"""JSON file adapter for the applied-state snapshot."""

import json
import os
from pathlib import Path
import tempfile

from src.application.ports.snapshot_store import (
    SnapshotStoreError,
    SnapshotStorePort,
)
from src.domain.models.accounts import ProxyAccount


class JsonSnapshotStore(SnapshotStorePort):
    """Snapshot stored as an indented JSON list of accounts.

    Saves write a temporary file next to the snapshot and rename it over the
    old one, so a crash leaves either the previous or the new snapshot.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store.

        Args:
            path: Location of the snapshot file.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> set[ProxyAccount]:
        """Return the stored accounts; a missing file is an empty snapshot.

        Raises:
            SnapshotStoreError: If the file is unreadable or malformed.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return set()
        except OSError as exc:
            raise SnapshotStoreError(
                f"Failed to read snapshot {self._path}: {exc}"
            ) from exc

        try:
            payload = json.loads(raw) if raw.strip() else []
            return {self._account_from_json(item) for item in payload or []}
        except (ValueError, TypeError, KeyError) as exc:
            raise SnapshotStoreError(
                f"Malformed snapshot {self._path}: {exc}"
            ) from exc

    def save(self, accounts: set[ProxyAccount]) -> None:
        """Atomically replace the snapshot with the given accounts.

        Raises:
            SnapshotStoreError: If the file cannot be written.
        """
        payload = [
            {
                "email": account.email,
                "level": account.level,
                "inbound_tag": account.inbound_tag,
                "password": account.password,
            }
            for account in sorted(accounts, key=lambda row: row.email)
        ]
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                json.dump(payload, handle, indent=2)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise SnapshotStoreError(
                f"Failed to write snapshot {self._path}: {exc}"
            ) from exc

    def clear(self) -> None:
        """Delete the snapshot file if present.

        Raises:
            SnapshotStoreError: If an existing file cannot be removed.
        """
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise SnapshotStoreError(
                f"Failed to delete snapshot {self._path}: {exc}"
            ) from exc

    @staticmethod
    def _account_from_json(item: dict) -> ProxyAccount:
        return ProxyAccount(
            email=str(item["email"]),
            inbound_tag=str(item["inbound_tag"]),
            password=str(item["password"]),
            level=int(item.get("level", 0)),
        )


__all__ = ["JsonSnapshotStore"]
