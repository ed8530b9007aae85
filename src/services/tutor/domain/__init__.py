from .entity import TutorProfile as TutorProfile
from .factory import TutorProfileDetails as TutorProfileDetails
from .factory import TutorProfileFactory as TutorProfileFactory
from .repository import TutorProfileRepository as TutorProfileRepository
from .value_object import TutorProfileId as TutorProfileId
