from aws_cdk import (
    Stack,
    Stage,
    pipelines,
    aws_codestarconnections as codestarconnections,
)
from constructs import Construct

from tutoring_stack import TutoringStack


class ApplicationStage(Stage):
    """アプリケーションスタックをまとめたステージ"""

    def __init__(self, scope: Construct, id: str, **kwargs) -> None:
        super().__init__(scope, id, **kwargs)

        TutoringStack(self, "Tutoring")


class PipelineStack(Stack):
    """CI/CD パイプラインを定義するスタック"""

    def __init__(self, scope: Construct, id: str, **kwargs) -> None:
        super().__init__(scope, id, **kwargs)

        # GitHub との接続（初回デプロイ後にコンソールで承認する）
        github_connection = codestarconnections.CfnConnection(
            self,
            "GitHubConnection",
            connection_name="tutoring-booking-github",
            provider_type="GitHub",
        )

        pipeline = pipelines.CodePipeline(
            self,
            "Pipeline",
            synth=pipelines.ShellStep(
                "Synth",
                input=pipelines.CodePipelineSource.connection(
                    "tutoring-platform/tutoring-booking",
                    "main",
                    connection_arn=github_connection.attr_connection_arn,
                ),
                env={"PYENV_VERSION": "3.13"},
                commands=[
                    "npm install -g aws-cdk",
                    'pip install -e ".[infra,test]"',
                    "pytest tests/unit",
                    "cdk synth",
                ],
            ),
        )

        pipeline.add_stage(
            ApplicationStage(self, "Prod"),
            pre=[
                pipelines.ManualApprovalStep(
                    "PromoteToProd",
                    comment="本番環境にデプロイします。テスト結果を確認してから承認してください。",
                )
            ],
        )
