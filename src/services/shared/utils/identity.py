from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from services.shared.domain import Actor, ReadRepository, Role

ROLE_CLAIM = "custom:role"


class IdentityError(Exception):
    """認証情報からActorを解決できない場合"""

    pass


def resolve_actor(
    event: APIGatewayProxyEvent, user_repository: ReadRepository
) -> Actor:
    """Cognito オーソライザーのクレームと永続化済みユーザーから Actor を解決する

    - sub: ユーザーID
    - ロール: 永続化済みユーザーのロールを優先する。講師プロフィール作成時の
      ロール変更はユーザーアイテムにのみ書き込まれ、トークンには反映されない。
    - custom:role: ユーザーアイテムがない場合のみ使う（STUDENT / TUTOR / ADMIN）
    アカウント状態（メール認証・停止）の確認はオーソライザー側の責務とする。
    """
    claims = event.request_context.authorizer.claims or {}
    user_id = claims.get("sub")
    if not user_id:
        raise IdentityError("Authentication required")

    user = user_repository.find_by_id(user_id)
    if user is not None:
        return Actor(id=user_id, role=user.role)

    raw_role = claims.get(ROLE_CLAIM)
    if not raw_role:
        raise IdentityError("Role claim is missing")
    raw_role = str(raw_role).upper()
    try:
        role = Role(raw_role)
    except ValueError as e:
        raise IdentityError(f"Unknown role: {raw_role}") from e

    return Actor(id=user_id, role=role)
