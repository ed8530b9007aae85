from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar

ID = TypeVar("ID")


@dataclass(frozen=True)
class DomainEvent:
    """ドメインイベントの基底クラス"""

    aggregate_id: str
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), kw_only=True
    )

    @property
    def name(self) -> str:
        return type(self).__name__


class Entity(ABC, Generic[ID]):
    """Entity 基底クラス

    - 同一性は ID のみで判定する
    """

    def __init__(self, id: ID) -> None:
        self._id = id

    @property
    def id(self) -> ID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._id == other._id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))


class AggregateRoot(Entity[ID]):
    """AggregateRoot 基底クラス

    - 状態変更は必ず集約ルートのメソッドを経由する
    - 状態変更の結果はドメインイベントとして記録する
    """

    def __init__(self, id: ID) -> None:
        super().__init__(id)
        self._events: list[DomainEvent] = []

    def record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def pull_events(self) -> list[DomainEvent]:
        """記録済みのドメインイベントを取り出し、クリアする"""
        events, self._events = self._events, []
        return events
