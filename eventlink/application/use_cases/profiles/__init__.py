"""Profile use cases: NGO profiles and user records."""

from eventlink.application.use_cases.profiles.ngo_profiles import NgoProfileService
from eventlink.application.use_cases.profiles.user_records import UserRecordService

__all__ = ["NgoProfileService", "UserRecordService"]
