import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class TutorProfileId:
    """講師プロフィールID（Value Object）

    ユーザーIDとは別の識別子。予約は講師プロフィールを参照する。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("TutorProfileId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "TutorProfileId":
        return cls(value=str(uuid.uuid4()))
