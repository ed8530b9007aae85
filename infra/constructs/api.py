from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_cognito as cognito
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

from infra.constructs.functions import Functions


class Api(Construct):
    """API Gateway Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        functions: Functions,
        user_pool: cognito.IUserPool,
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "TutoringRestApi",
            rest_api_name="Tutoring Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=10,
                throttling_rate_limit=5,
            ),
        )

        # Cognito オーソライザー: クレーム (sub, custom:role) がハンドラに渡される
        authorizer = apigw.CognitoUserPoolsAuthorizer(
            self,
            "CognitoAuthorizer",
            cognito_user_pools=[user_pool],
        )

        def add(
            resource: apigw.IResource,
            method: str,
            fn: _lambda.IFunction,
            public: bool = False,
        ) -> None:
            resource.add_method(
                method,
                apigw.LambdaIntegration(fn),
                authorizer=None if public else authorizer,
                authorization_type=(
                    apigw.AuthorizationType.NONE
                    if public
                    else apigw.AuthorizationType.COGNITO
                ),
            )

        # /bookings
        bookings = self.rest_api.root.add_resource("bookings")
        add(bookings, "POST", functions.create_booking)
        add(bookings, "GET", functions.list_bookings)

        # /bookings/{booking_id}
        booking = bookings.add_resource("{booking_id}")
        add(booking, "GET", functions.get_booking)
        add(booking, "DELETE", functions.delete_booking)

        # /bookings/{booking_id}/status
        add(booking.add_resource("status"), "PATCH", functions.change_booking_status)

        # /tutors/profile
        tutors = self.rest_api.root.add_resource("tutors")
        add(tutors.add_resource("profile"), "POST", functions.create_tutor_profile)

        # /tutors/{tutor_id}/bookings （公開）
        tutor = tutors.add_resource("{tutor_id}")
        add(
            tutor.add_resource("bookings"),
            "GET",
            functions.list_tutor_slots,
            public=True,
        )
