"""Error hierarchy shared by every part of the agent framework.

Each error family pairs an exception class with an enum of kinds.  The
enum value is the message template for that kind, and the keyword fields
given to the exception fill it in and become attributes of the instance.
"""

from __future__ import annotations

import string
from enum import Enum
from typing import Any, ClassVar


class AutoGenError(Exception):
    """Base error; raised directly for generic failures with a plain message."""

    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        if source is not None:
            self.__cause__ = source

    def __str__(self) -> str:
        return self.message

    def is_recoverable(self) -> bool:
        """Whether retrying the failed operation may succeed."""
        return False


class AgentErrorKind(Enum):
    NOT_FOUND = "Agent '{agent_id}' not found"
    ALREADY_EXISTS = "Agent '{agent_id}' already exists"
    NOT_RUNNING = "Agent '{agent_id}' is not running"
    ALREADY_RUNNING = "Agent '{agent_id}' is already running"
    INITIALIZATION_FAILED = "Failed to initialize agent '{agent_id}': {reason}"
    SHUTDOWN_FAILED = "Failed to shutdown agent '{agent_id}': {reason}"
    INVALID_CONFIG = "Invalid configuration for agent '{agent_id}': {details}"
    FACTORY_NOT_FOUND = "No factory found for agent type '{agent_type}'"


class MessageErrorKind(Enum):
    INVALID_FORMAT = "Invalid message format: {details}"
    TOO_LARGE = "Message too large: {size} bytes (max: {max_size} bytes)"
    ROUTING_FAILED = "Failed to route message to '{target}': {reason}"
    HANDLER_NOT_FOUND = "No handler found for message type '{message_type}'"
    TIMEOUT = "Message processing timeout after {timeout_ms} ms"
    VALIDATION_FAILED = "Message validation failed: {details}"


class RuntimeErrorKind(Enum):
    NOT_INITIALIZED = "Runtime not initialized"
    ALREADY_INITIALIZED = "Runtime already initialized"
    SHUTTING_DOWN = "Runtime is shutting down"
    RESOURCE_EXHAUSTED = "Resource '{resource}' exhausted: {details}"
    CONCURRENCY_LIMIT_EXCEEDED = "Concurrency limit exceeded (max: {limit})"
    SUBSCRIPTION_FAILED = "Failed to subscribe to topic '{topic}': {reason}"


class StateErrorKind(Enum):
    NOT_FOUND = "State not found for agent '{agent_id}'"
    CORRUPTED = "State corrupted for agent '{agent_id}': {details}"
    VERSION_MISMATCH = "State version mismatch: expected {expected}, found {found}"
    PERSISTENCE_FAILED = "State persistence failed: {reason}"
    LOADING_FAILED = "State loading failed: {reason}"


class CacheErrorKind(Enum):
    MISS = "Cache miss for key '{key}'"
    WRITE_FAILED = "Failed to write cache key '{key}': {reason}"
    READ_FAILED = "Failed to read cache key '{key}': {reason}"
    EVICTION_FAILED = "Cache eviction failed: {reason}"
    CAPACITY_EXCEEDED = "Cache capacity exceeded: {current} items (max: {max})"


class SerializationErrorKind(Enum):
    JSON_SERIALIZATION = "JSON serialization failed: {details}"
    JSON_DESERIALIZATION = "JSON deserialization failed: {details}"
    BINARY_SERIALIZATION = "Binary serialization failed: {details}"
    BINARY_DESERIALIZATION = "Binary deserialization failed: {details}"
    UNSUPPORTED_FORMAT = "Unsupported serialization format: {format}"


class NetworkErrorKind(Enum):
    CONNECTION_FAILED = "Connection to '{endpoint}' failed: {reason}"
    CONNECTION_TIMEOUT = "Connection to '{endpoint}' timed out after {timeout_ms} ms"
    REQUEST_FAILED = "Request failed: {details}"
    RESPONSE_PARSING_FAILED = "Response parsing failed: {details}"
    NETWORK_UNREACHABLE = "Network unreachable: {endpoint}"


class ConfigErrorKind(Enum):
    MISSING_REQUIRED = "Missing required configuration: {key}"
    INVALID_VALUE = "Invalid value for '{key}': '{value}' (expected: {expected})"
    FILE_NOT_FOUND = "Configuration file not found: {path}"
    PARSING_FAILED = "Failed to parse configuration file '{path}': {reason}"


class ValidationErrorKind(Enum):
    REQUIRED_FIELD_MISSING = "Required field missing: {field}"
    INVALID_FIELD_VALUE = "Invalid value for field '{field}': '{value}' ({reason})"
    OUT_OF_RANGE = (
        "Value for field '{field}' out of range: '{value}' (expected: {min} to {max})"
    )
    INVALID_FORMAT = "Invalid format for field '{field}': '{value}' (expected: {expected_format})"


def _template_fields(template: str) -> frozenset[str]:
    return frozenset(
        name for _, name, _, _ in string.Formatter().parse(template) if name
    )


class _KindedError(AutoGenError):
    """An error of one family, identified by a kind and its fields."""

    _prefix: ClassVar[str]
    _kind_type: ClassVar[type[Enum]]
    _recoverable_kinds: ClassVar[frozenset[Enum]] = frozenset()

    def __init__(self, kind: Enum, **fields: Any) -> None:
        if not isinstance(kind, self._kind_type):
            raise TypeError(
                f"{type(self).__name__} expects a {self._kind_type.__name__}, "
                f"got {kind!r}"
            )
        required = _template_fields(kind.value)
        if set(fields) != required:
            raise TypeError(
                f"{kind.name} takes fields {sorted(required)}, got {sorted(fields)}"
            )
        self.kind = kind
        self.fields = dict(fields)
        self.detail = kind.value.format(**fields)
        for name, value in fields.items():
            setattr(self, name, value)
        super().__init__(f"{self._prefix}: {self.detail}")

    def is_recoverable(self) -> bool:
        return self.kind in self._recoverable_kinds


class AgentError(_KindedError):
    """Failure concerning a particular agent."""

    _prefix = "Agent error"
    _kind_type = AgentErrorKind


class MessageError(_KindedError):
    """Failure while handling or routing a message."""

    _prefix = "Message error"
    _kind_type = MessageErrorKind
    _recoverable_kinds = frozenset({MessageErrorKind.TIMEOUT})


class AgentRuntimeError(_KindedError):
    """Failure of the agent runtime itself."""

    _prefix = "Runtime error"
    _kind_type = RuntimeErrorKind
    _recoverable_kinds = frozenset({RuntimeErrorKind.CONCURRENCY_LIMIT_EXCEEDED})


class StateError(_KindedError):
    """Failure while saving or loading agent state."""

    _prefix = "State error"
    _kind_type = StateErrorKind


class CacheError(_KindedError):
    """Failure of a cache operation."""

    _prefix = "Cache error"
    _kind_type = CacheErrorKind
    _recoverable_kinds = frozenset({CacheErrorKind.MISS})


class SerializationError(_KindedError):
    """Failure while encoding or decoding data."""

    _prefix = "Serialization error"
    _kind_type = SerializationErrorKind


class NetworkError(_KindedError):
    """Failure of network communication; always worth retrying."""

    _prefix = "Network error"
    _kind_type = NetworkErrorKind
    _recoverable_kinds = frozenset(NetworkErrorKind)


class ConfigError(_KindedError):
    """Missing or invalid configuration."""

    _prefix = "Configuration error"
    _kind_type = ConfigErrorKind


class ValidationError(_KindedError):
    """Input that does not satisfy a validation rule."""

    _prefix = "Validation error"
    _kind_type = ValidationErrorKind