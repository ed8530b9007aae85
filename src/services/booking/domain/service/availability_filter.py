from services.shared.domain import TimeRange
from services.shared.domain.exception import ValidationException

# datetime.weekday(): 金曜 = 4, 土曜 = 5
WEEKEND_DAYS = frozenset({4, 5})
WEEKEND_TOKENS = ("weekend", "friday", "saturday", "fri", "sat")
EARLIEST_HOUR = 6
LATEST_HOUR = 22


class AvailabilityFilter:
    """講師の空き状況（自由記述）に対する簡易チェック

    スケジュールの構文解析は行わない。判定するのは次の2点のみ:
    - 金曜・土曜の予約は、空き状況に週末を示す語句が含まれる場合だけ許可
    - 開始時刻が 6:00 より前、または 22:00 以降なら不可
    空き状況が未設定の講師には制限をかけない。
    """

    def check(self, time_range: TimeRange, availability: str | None) -> None:
        if not availability or not availability.strip():
            return

        start = time_range.start
        text = availability.lower()

        if start.weekday() in WEEKEND_DAYS and not any(
            token in text for token in WEEKEND_TOKENS
        ):
            raise ValidationException(
                "This tutor is not available on weekends (Friday/Saturday). "
                f"Available slots: {availability}"
            )

        if start.hour < EARLIEST_HOUR or start.hour >= LATEST_HOUR:
            raise ValidationException(
                "Booking time is outside typical tutoring hours. "
                f"Tutor availability: {availability}"
            )
