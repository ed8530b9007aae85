class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationException(DomainException):
    """入力値・ポリシー違反（時間帯の不正、過去日時、講師の空き状況外など）"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class ForbiddenException(DomainException):
    """存在するリソースに対して操作・閲覧の権限がない場合"""

    pass


class ConflictException(DomainException):
    """予約時間帯の重複（事前チェック・書き込み競合の両方）"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class InvalidTransitionException(BusinessRuleViolationException):
    """ライフサイクル上許可されていないステータス遷移"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（バージョン・ステータスが期待値と異なる場合）"""

    pass
