"""Agent identifiers: a validated agent type plus a per-instance key."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from agentweave.errors import (
    AutoGenError,
    SerializationError,
    SerializationErrorKind,
    ValidationError,
    ValidationErrorKind,
)

_AGENT_TYPE_RE = re.compile(r"[\w\-.]+")
_AGENT_TYPE_FORMAT = "^[\\w\\-\\.]+$"


def is_valid_agent_type(value: str) -> bool:
    """Return True if value is a non-empty run of word characters, '-' and '.'."""
    return _AGENT_TYPE_RE.fullmatch(value) is not None


def _invalid_agent_type(value: str) -> ValidationError:
    return ValidationError(
        ValidationErrorKind.INVALID_FORMAT,
        field="agent_type",
        value=value,
        expected_format=_AGENT_TYPE_FORMAT,
    )


@dataclass(frozen=True)
class AgentType:
    """A validated agent type name."""

    type_name: str

    def __post_init__(self) -> None:
        if not isinstance(self.type_name, str) or not is_valid_agent_type(self.type_name):
            raise _invalid_agent_type(str(self.type_name))

    def __str__(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class AgentId:
    """The address of one agent instance: ``type/key``."""

    agent_type: str
    key: str

    def __post_init__(self) -> None:
        agent_type: Any = self.agent_type
        if isinstance(agent_type, AgentType):
            object.__setattr__(self, "agent_type", agent_type.type_name)
        elif not isinstance(agent_type, str):
            raise AutoGenError(f"Failed to convert agent type: {agent_type!r}")
        elif not is_valid_agent_type(agent_type):
            raise _invalid_agent_type(agent_type)
        if not isinstance(self.key, str):
            raise TypeError(f"agent key must be a string, got {type(self.key).__name__}")

    @classmethod
    def from_type_and_key(cls, agent_type: AgentType, key: str) -> AgentId:
        """Build an id from an already validated type."""
        return cls(agent_type, key)

    @classmethod
    def from_str(cls, agent_id: str) -> AgentId:
        """Parse ``type/key``; everything after the first '/' is the key."""
        agent_type, sep, key = agent_id.partition("/")
        if not sep:
            raise ValidationError(
                ValidationErrorKind.INVALID_FORMAT,
                field="agent_id",
                value=agent_id,
                expected_format="type/key",
            )
        return cls(agent_type, key)

    def to_dict(self) -> dict[str, str]:
        """Serialisable form, with the type stored under ``"type"``."""
        return {"type": self.agent_type, "key": self.key}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AgentId:
        """Inverse of to_dict."""
        try:
            agent_type = data["type"]
            key = data["key"]
        except KeyError as exc:
            raise SerializationError(
                SerializationErrorKind.JSON_DESERIALIZATION,
                details=f"missing field {exc.args[0]!r}",
            ) from exc
        return cls(agent_type, key)

    def __str__(self) -> str:
        return f"{self.agent_type}/{self.key}"