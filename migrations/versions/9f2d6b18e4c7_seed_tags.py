"""seed_tags

Revision ID: 9f2d6b18e4c7
Revises: 3c41e9a7b2d0
Create Date: 2026-07-12 10:31:07.552981

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9f2d6b18e4c7"
down_revision: Union[str, Sequence[str], None] = "3c41e9a7b2d0"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TAGS = [
    ("javascript", "Questions about the JavaScript language and its runtimes"),
    ("python", "Questions about the Python language and its ecosystem"),
    ("react", "The React UI library"),
    ("nodejs", "Server-side JavaScript with Node.js"),
    ("sql", "Structured Query Language and relational databases"),
    ("css", "Styling web pages"),
    ("html", "Markup for web pages"),
    ("git", "Version control with git"),
    ("docker", "Containers and images"),
    ("api", "Designing and consuming APIs"),
]


def upgrade() -> None:
    """Seed initial tags."""
    tags_table = sa.table(
        "tags",
        sa.column("name", sa.String),
        sa.column("description", sa.String),
    )

    op.bulk_insert(
        tags_table,
        [{"name": name, "description": description} for name, description in TAGS],
    )


def downgrade() -> None:
    """Remove seeded tags that no question uses."""
    names = ", ".join(f"'{name}'" for name, _ in TAGS)
    op.execute(f"DELETE FROM tags WHERE usage_count = 0 AND name IN ({names})")
