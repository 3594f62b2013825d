"""Case-insensitive substring filters shared by the search listings."""

from sqlalchemy import ColumnElement, or_


def contains_text(text: str, *columns) -> ColumnElement[bool]:
    """Rows where any of ``columns`` contains ``text``, ignoring case.

    LIKE wildcards in ``text`` match literally.
    """
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))
