from photo_api.models.user import User
from photo_api.models.photo import Photo

__all__ = ["User", "Photo"]
