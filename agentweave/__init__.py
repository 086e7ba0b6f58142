"""Agent base classes, validated identifiers, closure agents, factories, an in-memory TTL cache, handler decorators and an agent registry."""

__version__ = "0.6.2"