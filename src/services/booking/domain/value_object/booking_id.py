import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class BookingId:
    """予約ID（Value Object）

    不変で、値が同じなら同一とみなされる。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("BookingId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "BookingId":
        return cls(value=str(uuid.uuid4()))
