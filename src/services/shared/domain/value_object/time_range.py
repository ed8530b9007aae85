from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip


@dataclass(frozen=True)
class TimeRange:
    """時間帯 [start, end)（半開区間）

    生成時には start < end を検証しない。予約作成時の検証順序
    （講師の存在確認 → 時間帯の妥当性 → 未来日時 …）を守るため、
    妥当性は is_valid() で明示的に確認する。
    タイムゾーンを持たない端点は UTC とみなす。
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _assume_utc(self.start))
        object.__setattr__(self, "end", _assume_utc(self.end))

    @classmethod
    def from_iso(cls, start: str, end: str) -> TimeRange:
        """ISO 8601 形式の文字列から生成する（タイムゾーンなしは UTC とみなす）"""
        return cls(start=_parse_iso(start), end=_parse_iso(end))

    def is_valid(self) -> bool:
        return self.start < self.end

    def is_future(self, now: datetime) -> bool:
        return self.start > now

    def overlaps(self, other: TimeRange) -> bool:
        """共有する瞬間が1つでもあれば True

        開始側の部分重複・終了側の部分重複・包含（どちら向きでも）を
        すべてこの1つの条件で判定する。端点が接するだけなら重複しない。
        """
        return self.start < other.end and other.start < self.end

    def format_window(self) -> str:
        """'Jan 5, 2025, 2:00 PM to 3:00 PM' 形式の表示文字列"""
        start = self.start
        date_part = f"{_MONTHS[start.month - 1]} {start.day}, {start.year}"
        return f"{date_part}, {_clock(start)} to {_clock(self.end)}"

    def __str__(self) -> str:
        return f"{self.start.isoformat()}/{self.end.isoformat()}"


def _clock(value: datetime) -> str:
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"


def _assume_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _parse_iso(s: str) -> datetime:
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(f"Invalid ISO 8601 datetime: {s}") from e
