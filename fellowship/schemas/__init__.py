from .user import User, Member, ProfileUpdate
from .tenant import Tenant, TenantPublic, TenantRegister, TenantUpdate
from .invitation import Invitation, InvitationCreate, InvitationPreview, InvitationAccepted
from .chat import Channel, ChannelCreate, Message, MessageCreate, DirectMessage, DirectMessageCreate
from .event import Event, EventCreate, EventUpdate, Rsvp, RsvpCreate
from .check_in import CheckIn, CheckInCreate, CheckInUpdate
from .post import Post, PostCreate, PostUpdate
from .ministry_team import MinistryTeam, MinistryTeamCreate, MinistryTeamUpdate, MinistryTeamWithMembers, TeamMember, TeamMemberCreate, TeamMemberUpdate
from .media_file import MediaFile, MediaFileUpdate
from .admin import ActivityLog, PlatformAnalytics
