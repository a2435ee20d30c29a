"""initial_schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('PLATFORM_ADMIN', 'TENANT_ADMIN', 'MEMBER', name='userrole')
tenant_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='tenantstatus')
organization_type = sa.Enum('CHURCH', 'NONPROFIT', 'BUSINESS', 'CLUB', 'COMMUNITY', 'OTHER', name='organizationtype')
invitation_status = sa.Enum('PENDING', 'ACCEPTED', 'DECLINED', 'EXPIRED', name='invitationstatus')
rsvp_status = sa.Enum('GOING', 'MAYBE', 'NOT_GOING', name='rsvpstatus')
team_role = sa.Enum('LEADER', 'CO_LEADER', 'MEMBER', 'VOLUNTEER', name='teamrole')
media_type = sa.Enum('IMAGE', 'VIDEO', name='mediatype')
media_category = sa.Enum('EVENT', 'POST', 'PROFILE', 'GENERAL', 'MINISTRY', name='mediacategory')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('address', sa.Text()),
        sa.Column('phone', sa.String(50)),
        sa.Column('email', sa.String(255)),
        sa.Column('website', sa.String(255)),
        sa.Column('logo_url', sa.String(500)),
        sa.Column('banner_url', sa.String(500)),
        sa.Column('organization_type', organization_type, nullable=False),
        sa.Column('status', tenant_status, nullable=False),
        sa.Column('admin_user_id', sa.String(36), nullable=False),
        sa.Column('reviewed_by', sa.String(36)),
        sa.Column('reviewed_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_tenants_status', 'tenants', ['status'])
    op.create_index('ix_tenants_admin_user_id', 'tenants', ['admin_user_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('external_id', sa.String(255), unique=True),
        sa.Column('email', sa.String(255), unique=True),
        sa.Column('first_name', sa.String(255)),
        sa.Column('last_name', sa.String(255)),
        sa.Column('profile_image_url', sa.String(500)),
        sa.Column('phone_number', sa.String(50)),
        sa.Column('address', sa.Text()),
        sa.Column('bio', sa.Text()),
        sa.Column('role', user_role, nullable=False),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='SET NULL')),
        sa.Column('stripe_customer_id', sa.String(255)),
        sa.Column('stripe_subscription_id', sa.String(255)),
        sa.Column('last_login', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_users_external_id', 'users', ['external_id'])
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])

    op.create_table(
        'sessions',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])
    op.create_index('ix_sessions_expires_at', 'sessions', ['expires_at'])

    op.create_table(
        'invitations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('token', sa.String(255), nullable=False, unique=True),
        sa.Column('status', invitation_status, nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('invited_by', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('responded_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_invitations_tenant_id', 'invitations', ['tenant_id'])
    op.create_index('ix_invitations_email', 'invitations', ['email'])
    op.create_index('ix_invitations_token', 'invitations', ['token'])
    op.create_index('ix_invitations_status', 'invitations', ['status'])

    op.create_table(
        'message_channels',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('created_by', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_message_channels_tenant_id', 'message_channels', ['tenant_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('channel_id', sa.String(36), sa.ForeignKey('message_channels.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_messages_channel_id', 'messages', ['channel_id'])

    op.create_table(
        'direct_messages',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_direct_messages_tenant_id', 'direct_messages', ['tenant_id'])
    op.create_index('ix_direct_messages_sender_id', 'direct_messages', ['sender_id'])
    op.create_index('ix_direct_messages_recipient_id', 'direct_messages', ['recipient_id'])

    op.create_table(
        'events',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('location', sa.String(255)),
        sa.Column('image_url', sa.String(500)),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime()),
        sa.Column('max_attendees', sa.Integer()),
        sa.Column('created_by', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_events_tenant_id', 'events', ['tenant_id'])
    op.create_index('ix_events_start_time', 'events', ['start_time'])

    op.create_table(
        'event_rsvps',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('event_id', sa.String(36), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', rsvp_status, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('event_id', 'user_id', name='event_rsvps_unique_idx'),
    )
    op.create_index('ix_event_rsvps_event_id', 'event_rsvps', ['event_id'])
    op.create_index('ix_event_rsvps_user_id', 'event_rsvps', ['user_id'])

    op.create_table(
        'check_ins',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('check_in_time', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('location', sa.String(255)),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_check_ins_tenant_id', 'check_ins', ['tenant_id'])
    op.create_index('ix_check_ins_user_id', 'check_ins', ['user_id'])
    op.create_index('ix_check_ins_check_in_time', 'check_ins', ['check_in_time'])

    op.create_table(
        'posts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('author_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(500)),
        sa.Column('video_url', sa.String(500)),
        sa.Column('is_pinned', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_posts_tenant_id', 'posts', ['tenant_id'])
    op.create_index('ix_posts_is_pinned', 'posts', ['is_pinned'])

    op.create_table(
        'ministry_teams',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_ministry_teams_tenant_id', 'ministry_teams', ['tenant_id'])

    op.create_table(
        'team_members',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('team_id', sa.String(36), sa.ForeignKey('ministry_teams.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', team_role, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('team_id', 'user_id', name='team_members_unique_idx'),
    )
    op.create_index('ix_team_members_team_id', 'team_members', ['team_id'])
    op.create_index('ix_team_members_user_id', 'team_members', ['user_id'])

    op.create_table(
        'media_files',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('uploaded_by', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_url', sa.String(1000), nullable=False),
        sa.Column('thumbnail_url', sa.String(1000)),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sa.String(100), nullable=False),
        sa.Column('media_type', media_type, nullable=False),
        sa.Column('category', media_category, nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('tags', sa.Text()),
        sa.Column('related_entity_id', sa.String(36)),
        sa.Column('related_entity_type', sa.String(50)),
        *_timestamps(),
    )
    op.create_index('ix_media_files_tenant_id', 'media_files', ['tenant_id'])
    op.create_index('ix_media_files_uploaded_by', 'media_files', ['uploaded_by'])
    op.create_index('ix_media_files_media_type', 'media_files', ['media_type'])
    op.create_index('ix_media_files_category', 'media_files', ['category'])

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE')),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE')),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('entity_type', sa.String(50)),
        sa.Column('entity_id', sa.String(36)),
        sa.Column('metadata', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_activity_logs_tenant_id', 'activity_logs', ['tenant_id'])
    op.create_index('ix_activity_logs_user_id', 'activity_logs', ['user_id'])
    op.create_index('ix_activity_logs_action', 'activity_logs', ['action'])
    op.create_index('ix_activity_logs_created_at', 'activity_logs', ['created_at'])


def downgrade() -> None:
    for table in (
        'activity_logs', 'media_files', 'team_members', 'ministry_teams', 'posts',
        'check_ins', 'event_rsvps', 'events', 'direct_messages', 'messages', 'message_channels',
        'invitations', 'sessions', 'users', 'tenants',
    ):
        op.drop_table(table)
    bind = op.get_bind()
    for enum_type in (
        media_category, media_type, team_role, rsvp_status, invitation_status,
        organization_type, tenant_status, user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
