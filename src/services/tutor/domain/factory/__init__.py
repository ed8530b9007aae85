from .tutor_profile_factory import TutorProfileDetails, TutorProfileFactory

__all__ = ["TutorProfileDetails", "TutorProfileFactory"]
