"""Scenarios for generating populated registries."""

from delphi.scenarios.land_registry import LandRegistryScenario

__all__ = ["LandRegistryScenario"]
