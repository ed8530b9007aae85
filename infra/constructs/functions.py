import datetime

from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_ssm as ssm
from constructs import Construct

# Powertools が公開している Lambda Layer の最新 ARN
POWERTOOLS_LAYER_PARAMETER = "/aws/service/powertools/python/x86_64/python3.13/latest"


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        approval_mode: str = "instant",
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._approval_mode = approval_mode
        self._powertools_layer = _lambda.LayerVersion.from_layer_version_arn(
            self,
            "PowertoolsLayer",
            ssm.StringParameter.value_for_string_parameter(
                self, POWERTOOLS_LAYER_PARAMETER
            ),
        )

        self.create_booking = self._create_function(
            "CreateBookingLambda",
            "services.booking.handlers.create.lambda_handler",
            "booking-service",
        )

        self.get_booking = self._create_function(
            "GetBookingLambda",
            "services.booking.handlers.get.lambda_handler",
            "booking-service",
        )

        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "services.booking.handlers.list.lambda_handler",
            "booking-service",
        )

        self.change_booking_status = self._create_function(
            "ChangeBookingStatusLambda",
            "services.booking.handlers.change_status.lambda_handler",
            "booking-service",
        )

        self.delete_booking = self._create_function(
            "DeleteBookingLambda",
            "services.booking.handlers.delete.lambda_handler",
            "booking-service",
        )

        self.list_tutor_slots = self._create_function(
            "ListTutorSlotsLambda",
            "services.booking.handlers.list_tutor_slots.lambda_handler",
            "booking-service",
        )

        self.create_tutor_profile = self._create_function(
            "CreateTutorProfileLambda",
            "services.tutor.handlers.create_profile.lambda_handler",
            "tutor-service",
        )

        for fn in [
            self.create_booking,
            self.change_booking_status,
            self.delete_booking,
            self.create_tutor_profile,
        ]:
            table.grant_read_write_data(fn)

        for fn in [self.get_booking, self.list_bookings, self.list_tutor_slots]:
            table.grant_read_data(fn)

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.create_booking,
            self.get_booking,
            self.list_bookings,
            self.change_booking_status,
            self.delete_booking,
            self.list_tutor_slots,
            self.create_tutor_profile,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_13,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._powertools_layer],
            environment={
                "TABLE_NAME": self._table.table_name,
                "POWERTOOLS_SERVICE_NAME": service_name,
                "BOOKING_APPROVAL_MODE": self._approval_mode,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            },
        )
