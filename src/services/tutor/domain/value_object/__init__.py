from .tutor_profile_id import TutorProfileId

__all__ = ["TutorProfileId"]
