from .base import BaseModel, TenantBaseModel
from .tenant import Tenant, TenantStatus, OrganizationType
from .user import User, UserRole
from .session import UserSession
from .invitation import Invitation, InvitationStatus
from .chat import Channel, ChannelMessage, DirectMessage
from .event import Event, EventRsvp, RsvpStatus
from .check_in import CheckIn
from .post import Post
from .ministry_team import MinistryTeam, TeamMember, TeamRole
from .media_file import MediaFile, MediaType, MediaCategory
from .activity_log import ActivityLog

__all__ = [
    "BaseModel", "TenantBaseModel", "Tenant", "TenantStatus", "OrganizationType",
    "User", "UserRole", "UserSession", "Invitation", "InvitationStatus",
    "Channel", "ChannelMessage", "DirectMessage", "Event", "EventRsvp", "RsvpStatus", "CheckIn",
    "Post", "MinistryTeam", "TeamMember", "TeamRole",
    "MediaFile", "MediaType", "MediaCategory", "ActivityLog",
]
