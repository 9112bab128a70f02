"""JSON Lines file sink for exporting notifications."""

import json
from pathlib import Path
from typing import Any

from delphi.exceptions import SinkError
from delphi.sinks.serialization import to_dict


class JsonFileSink:
    """Append records to one ``.jsonl`` file per topic."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON Lines files.
        pretty : bool
            Also write ``<topic>.json`` arrays with indentation on close.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}
        self._buffers: dict[str, list[dict]] = {}

    def path_for(self, topic: str) -> Path:
        # dev.delphi.property -> dev_delphi_property.jsonl
        return self.output_dir / (topic.replace(".", "_") + ".jsonl")

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Append a single record to the topic's file."""
        data = to_dict(record)
        try:
            with open(self.path_for(topic), "a", encoding="utf-8") as f:
                f.write(json.dumps(data, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            raise SinkError(f"Cannot write {topic} record to {self.output_dir}: {e}") from e

        if self.pretty:
            self._buffers.setdefault(topic, []).append(data)
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def close(self) -> None:
        """Write pretty copies if requested and print summary."""
        for topic, data in self._buffers.items():
            pretty_path = self.path_for(topic).with_suffix(".json")
            with open(pretty_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        print(f"JSON files written to: {self.output_dir}")
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} records")
