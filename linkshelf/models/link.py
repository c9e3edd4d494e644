"""Link model."""

from sqlalchemy import JSON, Column, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from linkshelf.database import Base
from linkshelf.models.mixins import TimestampMixin, generate_id


class Link(Base, TimestampMixin):
    """A saved bookmark owned by one user."""

    __tablename__ = "links"
    __table_args__ = (Index("ix_links_user_id_created_at", "user_id", "created_at"),)

    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    url = Column(Text, nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True, default="")
    # ["dev", "python", ...] in insertion order
    tags = Column(JSON, nullable=True)
    category = Column(String(255), nullable=True, default="")
    link_type = Column(String(20), nullable=False, default="website")

    # Relationships
    owner = relationship("User", backref="links")
