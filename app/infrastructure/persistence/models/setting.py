"""Setting ORM model. Key/value application configuration stored as strings."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Setting(CuidMixin, TimestampMixin, Base):
    """Setting. Table: setting. Unique key (dotted, e.g. app.name); value is string-encoded."""

    __tablename__ = "setting"

    key: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(
        String, nullable=False, default="general", server_default="general", index=True
    )
