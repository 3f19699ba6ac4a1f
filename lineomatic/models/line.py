"""Line model for storing transit lines and their section chain."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lineomatic.models.base import Base, TimestampMixin
from lineomatic.models.chain import SectionChain
from lineomatic.models.section import Section
from lineomatic.models.station import Station


class Line(Base, TimestampMixin):
    """Line model representing a single path of stations.

    The line owns its sections; dropping a section from ``sections`` deletes it.
    """

    __tablename__ = "lines"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    sections: Mapped[list[Section]] = relationship(
        Section, back_populates="line", cascade="all, delete-orphan", lazy="selectin"
    )

    @property
    def chain(self) -> SectionChain:
        return SectionChain(self.sections)

    def stations_in_order(self) -> list[Station]:
        return self.chain.stations_in_order()

    def add_section(self, section: Section) -> None:
        self.chain.add(section)

    def remove_station(self, station: Station) -> Section:
        return self.chain.remove_by_down_station(station)

    def __repr__(self) -> str:
        return f"<Line(id={self.id!r}, name={self.name!r}, color={self.color!r})>"
