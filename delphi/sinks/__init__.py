"""Output sinks for registry notifications."""

from typing import Any

from delphi.config import DelphiConfig
from delphi.sinks.console import ConsoleSink
from delphi.sinks.json_file import JsonFileSink
from delphi.sinks.kafka import KafkaSink
from delphi.sinks.memory import MemorySink


def build_sink(config: DelphiConfig) -> Any:
    """Instantiate the sink named by ``config.sink``."""
    if config.sink == "console":
        return ConsoleSink(pretty=config.output.pretty_json)
    if config.sink == "json":
        return JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
    if config.sink == "kafka":
        return KafkaSink(config.kafka)
    return MemorySink()


__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink", "MemorySink", "build_sink"]
