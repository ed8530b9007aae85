from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class ReadRepository(ABC, Generic[T, ID]):
    """参照専用 Repository 基底クラス

    - コアが所有しない集約（ユーザー、講師プロフィール）の読み取りに使う
    """

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで集約を検索する"""
        raise NotImplementedError


class Repository(ReadRepository[T, ID]):
    """Repository 基底クラス

    - 集約の永続化を抽象化する
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """集約を永続化する"""
        raise NotImplementedError
