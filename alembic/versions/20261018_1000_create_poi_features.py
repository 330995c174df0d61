"""create poi_features table

Revision ID: 20261018_1000_create_poi_features
Revises:
Create Date: 2026-10-18 10:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261018_1000_create_poi_features'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'poi_features',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('source', sa.String(32), primary_key=True),
        sa.Column('category', sa.String(64), nullable=False, index=True),
        sa.Column('latitude', sa.Float(), nullable=False, index=True),
        sa.Column('longitude', sa.Float(), nullable=False, index=True),
        sa.Column('document', sa.JSON(), nullable=False),
    )

def downgrade() -> None:
    op.drop_table('poi_features')
