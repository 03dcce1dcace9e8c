"""Import all models so Base.metadata knows every table."""
from silentnote.infrastructure.db.models.message import MessageModel
from silentnote.infrastructure.db.models.preferences import AccountPreferencesModel
from silentnote.infrastructure.db.models.profile import ProfileModel
from silentnote.infrastructure.db.models.profile_view import ProfileViewModel
from silentnote.infrastructure.db.models.user_role import UserRoleModel

__all__ = [
    "AccountPreferencesModel",
    "MessageModel",
    "ProfileModel",
    "ProfileViewModel",
    "UserRoleModel",
]
