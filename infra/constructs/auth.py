from aws_cdk import RemovalPolicy
from aws_cdk import aws_cognito as cognito
from constructs import Construct


class Auth(Construct):
    """Cognito User Pool Construct

    トークンの sub がユーザーID、custom:role がロール（STUDENT / TUTOR / ADMIN）。
    """

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.user_pool = cognito.UserPool(
            self,
            "UserPool",
            user_pool_name="tutoring-users",
            self_sign_up_enabled=True,
            sign_in_aliases=cognito.SignInAliases(email=True),
            auto_verify=cognito.AutoVerifiedAttrs(email=True),
            custom_attributes={
                "role": cognito.StringAttribute(min_len=1, max_len=16, mutable=True),
            },
            removal_policy=RemovalPolicy.DESTROY,
        )

        # custom:role はクライアントから書き換えられないようにする
        self.user_pool_client = self.user_pool.add_client(
            "WebClient",
            auth_flows=cognito.AuthFlow(user_srp=True),
            write_attributes=cognito.ClientAttributes().with_standard_attributes(
                email=True, fullname=True
            ),
        )
