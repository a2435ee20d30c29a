# File: fellowship/api/v1/api.py
from fastapi import APIRouter
from fellowship.api.v1.endpoints import (
    admin,
    auth,
    channels,
    check_ins,
    direct_messages,
    events,
    invitations,
    media,
    members,
    ministry_teams,
    organizations,
    posts,
    profile,
    realtime,
)

# REST routes, mounted under settings.API_PREFIX
api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
api_router.include_router(admin.router, prefix="/admin", tags=["platform admin"])
api_router.include_router(invitations.router, prefix="/invitations", tags=["invitations"])
api_router.include_router(channels.router, prefix="/channels", tags=["channels"])
api_router.include_router(direct_messages.router, prefix="/direct-messages", tags=["direct messages"])
api_router.include_router(members.router, prefix="/members", tags=["members"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(check_ins.router, prefix="/check-ins", tags=["check-ins"])
api_router.include_router(ministry_teams.router, prefix="/ministry-teams", tags=["ministry teams"])
api_router.include_router(media.router, prefix="/media", tags=["media"])

# WebSocket routes live at the root, outside the REST prefix
ws_router = APIRouter()
ws_router.include_router(realtime.router, tags=["realtime"])
