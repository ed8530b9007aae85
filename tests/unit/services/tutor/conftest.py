from decimal import Decimal

import pytest

from services.tutor.domain.entity import TutorProfile
from services.tutor.domain.factory import TutorProfileDetails
from services.tutor.domain.value_object import TutorProfileId


@pytest.fixture
def tutor_profile_details() -> TutorProfileDetails:
    return {
        "hourly_rate": Decimal("40.00"),
        "experience": 5,
        "bio": "Math tutor",
        "subjects": ["math", "physics"],
        "availability": "Mon-Thu, 9am-5pm",
    }


@pytest.fixture
def create_tutor_profile():
    """TutorProfile を生成する Factory fixture"""

    def _factory(
        tutor_id: str = "tutor-1",
        user_id: str = "user-1",
        availability: str | None = None,
    ) -> TutorProfile:
        return TutorProfile(
            id=TutorProfileId(value=tutor_id),
            user_id=user_id,
            hourly_rate=Decimal("40.00"),
            experience=5,
            availability=availability,
            bio="Math tutor",
            subjects=("math",),
        )

    return _factory
