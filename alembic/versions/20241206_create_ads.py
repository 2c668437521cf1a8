"""create ads table

Revision ID: 20241206_create_ads
Revises:
Create Date: 2024-12-06

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '20241206_create_ads'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'ads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('user_email', sa.String(length=255), nullable=False),
        sa.Column('user_phone', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=False), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=False), nullable=False),
        sa.Column('top_ad', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'images',
            sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'),
            nullable=False,
            server_default=sa.text("'[]'"),
        ),
        sa.PrimaryKeyConstraint('id'),
    )

    # access paths for filtering and sorting, no uniqueness implied
    op.create_index('idx_ads_price', 'ads', ['price'])
    op.create_index('idx_ads_status', 'ads', ['status'])
    op.create_index('idx_ads_updated_at', 'ads', ['updated_at'])
    op.create_index('idx_ads_top_ad', 'ads', ['top_ad'])


def downgrade() -> None:
    op.drop_index('idx_ads_top_ad', table_name='ads')
    op.drop_index('idx_ads_updated_at', table_name='ads')
    op.drop_index('idx_ads_status', table_name='ads')
    op.drop_index('idx_ads_price', table_name='ads')
    op.drop_table('ads')
