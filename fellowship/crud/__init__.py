from .user import user
from .tenant import tenant
from .invitation import invitation
from .chat import channel, channel_message, direct_message
from .event import event, event_rsvp
from .check_in import check_in
from .post import post
from .ministry_team import ministry_team, team_member
from .media_file import media_file
from .activity_log import activity_log
