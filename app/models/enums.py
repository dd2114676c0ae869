from enum import Enum

class Permission(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"

class ApproverRole(str, Enum):
    PO = "PO"
    LEAD = "LEAD"

class NotificationType(str, Enum):
    review_requested = "review_requested"
    permission_changed = "permission_changed"
