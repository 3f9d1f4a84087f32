"""Slot repository backed by JSON files in a local directory."""

from dataclasses import dataclass
from pathlib import Path

from kitchen_wiz.services.storage import SlotRepository


@dataclass
class JsonFileSlotRepository(SlotRepository):
    """Stores each slot as ``<slot>.json`` under a data directory."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileSlotRepository":
        """Create the repository, making the directory if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def read(self, slot: str) -> str | None:
        """Return the file contents for a slot, if the file exists."""
        path = self._path(slot)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, slot: str, payload: str) -> None:
        """Replace the slot file atomically."""
        path = self._path(slot)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)

    def _path(self, slot: str) -> Path:
        return self.directory / f"{slot}.json"
