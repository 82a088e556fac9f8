"""
Abstract model with the columns every table shares: a UUID primary key
and creation/update timestamps filled in by the database.
"""

import uuid

from sqlalchemy import Column, DateTime, Uuid, func

from cookbook_api.db.base import Base


class BaseModel(Base):
    """
    Parent of User, Recipe and ErrorLog.

    `id` is generated client-side (uuid4) so it is known before flush.
    `updated_at` is bumped by the ORM on every UPDATE, including the bulk
    updates issued by the user directory.
    """

    __abstract__ = True

    # Native UUID on PostgreSQL, CHAR(32) elsewhere
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
