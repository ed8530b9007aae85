from aws_cdk import Stack
from constructs import Construct

from infra.constructs import Api, Auth, Database, Functions


class TutoringStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        approval_mode: str = "instant",
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        auth = Auth(self, "Auth")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            approval_mode=approval_mode,
        )

        Api(
            self,
            "Api",
            functions=fns,
            user_pool=auth.user_pool,
        )
