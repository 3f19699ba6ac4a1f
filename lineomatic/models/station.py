"""Station model for storing the stops a line can pass through."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from lineomatic.models.base import Base, TimestampMixin


class Station(Base, TimestampMixin):
    """Station model representing a physical stop.

    Sections refer to stations by identity only; a station is never owned by a line.
    """

    __tablename__ = "stations"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"<Station(id={self.id!r}, name={self.name!r})>"
