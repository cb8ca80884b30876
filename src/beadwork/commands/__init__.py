"""Command implementations exposed by the Beadwork CLI."""

from .fields import list_field_keys, parse_fields, set_fields
from .ready import ready

__all__ = ["list_field_keys", "parse_fields", "ready", "set_fields"]
