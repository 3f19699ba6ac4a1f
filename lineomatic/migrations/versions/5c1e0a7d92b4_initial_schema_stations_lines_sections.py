"""Initial schema: stations, lines, sections

Revision ID: 5c1e0a7d92b4
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e0a7d92b4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp_columns(is_sqlite: bool) -> list[sa.Column]:
    if is_sqlite:
        default = sa.text("(datetime('now'))")
        timestamp_type = sa.DateTime()
    else:
        default = sa.text("now()")
        timestamp_type = sa.DateTime(timezone=True)
    return [
        sa.Column("created_at", timestamp_type, server_default=default, nullable=False),
        sa.Column("updated_at", timestamp_type, server_default=default, nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    is_sqlite = bind.dialect.name == "sqlite"

    # Create stations table
    op.create_table(
        "stations",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_stations_name"), "stations", ["name"], unique=True)

    # Create lines table
    op.create_table(
        "lines",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_lines_name"), "lines", ["name"], unique=True)

    # Create sections table; a NULL station marks the first or last sentinel
    op.create_table(
        "sections",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("line_id", sa.String(length=255), nullable=False),
        sa.Column("up_station_id", sa.String(length=255), nullable=True),
        sa.Column("down_station_id", sa.String(length=255), nullable=True),
        sa.Column("distance", sa.Integer(), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.ForeignKeyConstraint(["line_id"], ["lines.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["up_station_id"], ["stations.id"]),
        sa.ForeignKeyConstraint(["down_station_id"], ["stations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sections_line_id"), "sections", ["line_id"], unique=False)
    op.create_index(op.f("ix_sections_up_station_id"), "sections", ["up_station_id"], unique=False)
    op.create_index(
        op.f("ix_sections_down_station_id"), "sections", ["down_station_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_sections_down_station_id"), table_name="sections")
    op.drop_index(op.f("ix_sections_up_station_id"), table_name="sections")
    op.drop_index(op.f("ix_sections_line_id"), table_name="sections")
    op.drop_table("sections")
    op.drop_index(op.f("ix_lines_name"), table_name="lines")
    op.drop_table("lines")
    op.drop_index(op.f("ix_stations_name"), table_name="stations")
    op.drop_table("stations")
