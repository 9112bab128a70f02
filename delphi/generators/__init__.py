"""Faker-based generators for registry sample data."""

from delphi.generators.base import BaseGenerator
from delphi.generators.registry import AccountGenerator, ClaimGenerator, PropertyTypeGenerator

__all__ = ["AccountGenerator", "BaseGenerator", "ClaimGenerator", "PropertyTypeGenerator"]
