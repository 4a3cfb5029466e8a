"""JSON file storage for the client state document."""

import json
from dataclasses import dataclass
from pathlib import Path

from recipe_planner.services.client_state import ClientStateStore


@dataclass
class JsonFileStateStore(ClientStateStore):
    """Keeps the client state in a single JSON file."""

    path: Path

    def load(self) -> dict[str, object] | None:
        """Return the stored document, or None if the file is missing."""
        if not self.path.exists():
            return None
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Client state in {self.path} is not a JSON object")
        return data

    def save(self, payload: dict[str, object]) -> None:
        """Write the document, replacing the previous file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)


@dataclass
class InMemoryStateStore(ClientStateStore):
    """Keeps the client state document in memory."""

    payload: dict[str, object] | None = None

    def load(self) -> dict[str, object] | None:
        return self.payload

    def save(self, payload: dict[str, object]) -> None:
        self.payload = payload
