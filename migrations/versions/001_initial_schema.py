"""Initial schema: projects, local history, snapshots and notes

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create projects table
    op.create_table(
        'projects',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=True),
        sa.Column('path', sa.String(length=1000), nullable=True),
        sa.Column('repository_owner', sa.String(length=255), nullable=True),
        sa.Column('repository_name', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('last_commit', sa.String(length=255), nullable=True),
        sa.Column('technologies', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create local_commits table
    op.create_table(
        'local_commits',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('project_id', sa.String(length=64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('author_name', sa.String(length=255), nullable=False),
        sa.Column('author_email', sa.String(length=255), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('parent_commit_id', sa.String(length=64), sa.ForeignKey('local_commits.id'), nullable=True),
        sa.Column('pushed_to_remote', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('remote_commit_sha', sa.String(length=40), nullable=True),
    )
    op.create_index('idx_local_commits_project_ts', 'local_commits', ['project_id', 'timestamp'])

    # Create local_branches table
    op.create_table(
        'local_branches',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('project_id', sa.String(length=64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('current_commit_id', sa.String(length=64), sa.ForeignKey('local_commits.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('project_id', 'name', name='uq_local_branches_project_name'),
    )
    op.create_index(
        'uq_local_branches_active',
        'local_branches',
        ['project_id'],
        unique=True,
        sqlite_where=sa.text('is_active = 1'),
        postgresql_where=sa.text('is_active'),
    )

    # Create changes table
    op.create_table(
        'changes',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('project_id', sa.String(length=64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('committed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('idx_changes_project_committed', 'changes', ['project_id', 'committed'])

    # Create change_files table
    op.create_table(
        'change_files',
        sa.Column('change_id', sa.String(length=64), sa.ForeignKey('changes.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('file_path', sa.String(length=1000), primary_key=True),
    )

    # Create commit_changes table
    op.create_table(
        'commit_changes',
        sa.Column('commit_id', sa.String(length=64), sa.ForeignKey('local_commits.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('change_id', sa.String(length=64), sa.ForeignKey('changes.id', ondelete='CASCADE'), primary_key=True),
        sa.UniqueConstraint('change_id', name='uq_commit_changes_change'),
    )

    # Create file_snapshots table
    op.create_table(
        'file_snapshots',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('commit_id', sa.String(length=64), sa.ForeignKey('local_commits.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_path', sa.String(length=1000), nullable=False),
        sa.Column('operation', sa.String(length=50), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('size', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('modified_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_file_snapshots_commit', 'file_snapshots', ['commit_id', 'file_path'])

    # Create notes table
    op.create_table(
        'notes',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('project_id', sa.String(length=64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_notes_project_updated', 'notes', ['project_id', 'updated_at'])


def downgrade() -> None:
    op.drop_table('notes')
    op.drop_table('file_snapshots')
    op.drop_table('commit_changes')
    op.drop_table('change_files')
    op.drop_table('changes')
    op.drop_table('local_branches')
    op.drop_table('local_commits')
    op.drop_table('projects')
