from decimal import Decimal
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
    booking_key,
    schedule_key,
    slot_key,
)
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


def _cancelled(*codes: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
            "CancellationReasons": [{"Code": code} for code in codes],
        },
        "TransactWriteItems",
    )


def _item(booking_id: str = "booking-1", status: str = "CONFIRMED") -> dict:
    return {
        "PK": f"BOOKING#{booking_id}",
        "SK": "BOOKING",
        "booking_id": booking_id,
        "student_id": "student-1",
        "tutor_id": "tutor-1",
        "start_time": "2025-01-06T14:00:00+00:00",
        "end_time": "2025-01-06T15:00:00+00:00",
        "status": status,
        "created_at": "2025-01-01T09:00:00+00:00",
        "updated_at": "2025-01-01T09:00:00+00:00",
    }


class TestDynamoDBBookingRepository:
    @pytest.fixture
    def repository(self):
        with patch(
            "services.booking.infrastructure.dynamodb_booking_repository.boto3"
        ) as mock_boto3:
            repository = DynamoDBBookingRepository(table_name="tutoring-table")
        assert repository.table is mock_boto3.resource.return_value.Table.return_value
        return repository

    def test_keys(self, create_booking):
        booking = create_booking()

        assert booking_key(booking.id) == {"PK": "BOOKING#booking-1", "SK": "BOOKING"}
        assert schedule_key(booking.tutor_id) == {"PK": "TUTOR#tutor-1", "SK": "SCHEDULE"}
        assert slot_key(booking) == {
            "PK": "TUTOR#tutor-1",
            "SK": "SLOT#START#2025-01-06T14:00:00+00:00#booking-1",
        }

    def test_get_schedule_version(self, repository, tutor_id):
        repository.table.get_item.return_value = {"Item": {"version": Decimal("3")}}

        assert repository.get_schedule_version(tutor_id) == 3
        repository.table.get_item.assert_called_once_with(
            Key={"PK": "TUTOR#tutor-1", "SK": "SCHEDULE"}, ConsistentRead=True
        )

    def test_get_schedule_version_defaults_to_zero(self, repository, tutor_id):
        repository.table.get_item.return_value = {}
        assert repository.get_schedule_version(tutor_id) == 0

    def test_save_writes_booking_slot_and_schedule(self, repository, create_booking):
        repository.save(create_booking(), expected_schedule_version=0)

        items = repository.client.transact_write_items.call_args.kwargs["TransactItems"]
        booking_put, slot_put, schedule_update = items

        assert booking_put["Put"]["ConditionExpression"] == "attribute_not_exists(PK)"
        assert booking_put["Put"]["Item"]["PK"] == {"S": "BOOKING#booking-1"}
        assert booking_put["Put"]["Item"]["GSI1PK"] == {"S": "TUTOR#tutor-1"}
        assert booking_put["Put"]["Item"]["GSI2PK"] == {"S": "STUDENT#student-1"}
        assert booking_put["Put"]["Item"]["GSI3PK"] == {"S": "BOOKINGS"}
        assert booking_put["Put"]["Item"]["status"] == {"S": "CONFIRMED"}
        assert slot_put["Put"]["Item"]["SK"] == {
            "S": "SLOT#START#2025-01-06T14:00:00+00:00#booking-1"
        }
        update = schedule_update["Update"]
        assert update["ConditionExpression"] == "attribute_not_exists(version)"
        assert update["ExpressionAttributeValues"] == {":next": {"N": "1"}}

    def test_save_checks_expected_version(self, repository, create_booking):
        repository.save(create_booking(), expected_schedule_version=3)

        items = repository.client.transact_write_items.call_args.kwargs["TransactItems"]
        update = items[2]["Update"]
        assert update["ConditionExpression"] == "version = :expected"
        assert update["ExpressionAttributeValues"] == {
            ":expected": {"N": "3"},
            ":next": {"N": "4"},
        }

    def test_save_schedule_conflict_raises_optimistic_lock(
        self, repository, create_booking
    ):
        repository.client.transact_write_items.side_effect = _cancelled(
            "None", "None", "ConditionalCheckFailed"
        )
        with pytest.raises(OptimisticLockException):
            repository.save(create_booking(), expected_schedule_version=1)

    def test_save_existing_booking_raises_duplicate(self, repository, create_booking):
        repository.client.transact_write_items.side_effect = _cancelled(
            "ConditionalCheckFailed", "None", "None"
        )
        with pytest.raises(DuplicateResourceException):
            repository.save(create_booking())

    def test_save_propagates_other_client_errors(self, repository, create_booking):
        repository.client.transact_write_items.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException"}},
            "TransactWriteItems",
        )
        with pytest.raises(ClientError):
            repository.save(create_booking())

    def test_find_by_id(self, repository):
        repository.table.get_item.return_value = {"Item": _item()}

        booking = repository.find_by_id(BookingId(value="booking-1"))

        assert booking.id == BookingId(value="booking-1")
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.start_time.isoformat() == "2025-01-06T14:00:00+00:00"
        assert str(booking.tutor_id) == "tutor-1"

    def test_find_by_id_not_found(self, repository):
        repository.table.get_item.return_value = {}
        assert repository.find_by_id(BookingId(value="missing")) is None

    def test_find_slot_holders_uses_consistent_read(self, repository, tutor_id):
        repository.table.query.return_value = {
            "Items": [_item("b-1"), _item("b-2", status="CANCELLED")]
        }

        holders = repository.find_slot_holders(tutor_id)

        assert [str(b.id) for b in holders] == ["b-1"]
        assert repository.table.query.call_args.kwargs["ConsistentRead"] is True

    def test_find_by_tutor_paginates(self, repository, tutor_id):
        repository.table.query.side_effect = [
            {"Items": [_item("b-1")], "LastEvaluatedKey": {"PK": "x"}},
            {"Items": [_item("b-2")]},
        ]

        bookings = repository.find_by_tutor(tutor_id)

        assert [str(b.id) for b in bookings] == ["b-1", "b-2"]
        second_call = repository.table.query.call_args_list[1].kwargs
        assert second_call["IndexName"] == "GSI1"
        assert second_call["ExclusiveStartKey"] == {"PK": "x"}
        assert second_call["ScanIndexForward"] is False

    def test_find_by_student_and_all_use_indexes(self, repository):
        repository.table.query.return_value = {"Items": []}

        repository.find_by_student("student-1")
        repository.find_all()

        indexes = [c.kwargs["IndexName"] for c in repository.table.query.call_args_list]
        assert indexes == ["GSI2", "GSI3"]

    def test_update_status_keeps_slot_while_it_blocks(self, repository, create_booking):
        booking = create_booking(status=BookingStatus.PENDING)
        booking.confirm()

        repository.update_status(booking, expected_status=BookingStatus.PENDING)

        items = repository.client.transact_write_items.call_args.kwargs["TransactItems"]
        assert len(items) == 2
        for entry in items:
            update = entry["Update"]
            assert update["ConditionExpression"] == "#status = :expected"
            assert update["ExpressionAttributeValues"][":status"] == {"S": "CONFIRMED"}
            assert update["ExpressionAttributeValues"][":expected"] == {"S": "PENDING"}
        assert items[1]["Update"]["Key"]["SK"]["S"].startswith("SLOT#")

    @pytest.mark.parametrize("finish", ["cancel", "complete"])
    def test_update_status_to_terminal_deletes_slot(
        self, repository, create_booking, finish
    ):
        booking = create_booking()
        getattr(booking, finish)()

        repository.update_status(booking, expected_status=BookingStatus.CONFIRMED)

        items = repository.client.transact_write_items.call_args.kwargs["TransactItems"]
        assert len(items) == 2
        update = items[0]["Update"]
        assert update["Key"] == {
            "PK": {"S": "BOOKING#booking-1"},
            "SK": {"S": "BOOKING"},
        }
        assert update["ConditionExpression"] == "#status = :expected"
        assert update["ExpressionAttributeValues"][":expected"] == {"S": "CONFIRMED"}
        slot = items[1]["Delete"]
        assert slot["Key"]["PK"] == {"S": "TUTOR#tutor-1"}
        assert slot["Key"]["SK"]["S"].startswith("SLOT#")
        assert "ConditionExpression" not in slot

    def test_update_status_conflict_raises_optimistic_lock(
        self, repository, create_booking
    ):
        repository.client.transact_write_items.side_effect = _cancelled(
            "ConditionalCheckFailed", "None"
        )
        with pytest.raises(OptimisticLockException):
            repository.update_status(
                create_booking(), expected_status=BookingStatus.CONFIRMED
            )

    def test_delete_removes_booking_and_slot(self, repository, create_booking):
        booking = create_booking()

        repository.delete(booking, expected_status=BookingStatus.CONFIRMED)

        items = repository.client.transact_write_items.call_args.kwargs["TransactItems"]
        assert items[0]["Delete"]["Key"] == {
            "PK": {"S": "BOOKING#booking-1"},
            "SK": {"S": "BOOKING"},
        }
        assert items[0]["Delete"]["ConditionExpression"] == "#status = :expected"
        assert items[1]["Delete"]["Key"]["PK"] == {"S": "TUTOR#tutor-1"}

    def test_delete_conflict_raises_optimistic_lock(self, repository, create_booking):
        repository.client.transact_write_items.side_effect = _cancelled(
            "ConditionalCheckFailed", "None"
        )
        with pytest.raises(OptimisticLockException):
            repository.delete(create_booking(), expected_status=BookingStatus.CONFIRMED)
