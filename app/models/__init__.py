from app.models.notification import Notification
from app.models.project import Project
from app.models.user import User

__all__ = ["User", "Project", "Notification"]
