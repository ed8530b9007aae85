from .tutor_profile import TutorProfile, TutorProfileCreated

__all__ = ["TutorProfile", "TutorProfileCreated"]
