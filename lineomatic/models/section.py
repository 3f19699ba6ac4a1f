"""Section model for storing the directed segments of a line."""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lineomatic.exceptions import IntegrityError
from lineomatic.models.base import Base, TimestampMixin
from lineomatic.models.station import Station


def _same_station(left: Optional[Station], right: Optional[Station]) -> bool:
    """Compare two stations by identity. A missing station never matches."""
    if left is None or right is None:
        return False
    return left.id == right.id


def _generate_id() -> str:
    return str(uuid.uuid4())


class Section(Base, TimestampMixin):
    """Section model representing one directed segment of a line.

    A section with no up station is the first sentinel of its line and a
    section with no down station is the last sentinel. Sentinels carry a
    distance of zero; every other section has a positive distance.
    """

    __tablename__ = "sections"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=_generate_id)
    line_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("lines.id", ondelete="CASCADE"), nullable=False, index=True
    )
    up_station_id: Mapped[Optional[str]] = mapped_column(
        String(255), ForeignKey("stations.id"), nullable=True, index=True
    )
    down_station_id: Mapped[Optional[str]] = mapped_column(
        String(255), ForeignKey("stations.id"), nullable=True, index=True
    )
    distance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    line: Mapped["Line"] = relationship("Line", back_populates="sections")
    up_station: Mapped[Optional[Station]] = relationship(
        Station, foreign_keys=[up_station_id], lazy="joined"
    )
    down_station: Mapped[Optional[Station]] = relationship(
        Station, foreign_keys=[down_station_id], lazy="joined"
    )

    @property
    def is_first(self) -> bool:
        return self.up_station is None

    @property
    def is_last(self) -> bool:
        return self.down_station is None

    @property
    def is_sentinel(self) -> bool:
        return self.is_first or self.is_last

    def has_same_up_station_as(self, other: "Section") -> bool:
        return _same_station(self.up_station, other.up_station)

    def has_same_down_station_as(self, other: "Section") -> bool:
        return _same_station(self.down_station, other.down_station)

    def has_station(self, station: Optional[Station]) -> bool:
        return _same_station(self.up_station, station) or _same_station(
            self.down_station, station
        )

    def shares_station_with(self, other: "Section") -> bool:
        return self.has_station(other.up_station) or self.has_station(other.down_station)

    def is_next_section_of(self, previous: "Section") -> bool:
        return _same_station(self.up_station, previous.down_station)

    def can_insert(self, new_section: "Section") -> bool:
        """Check whether ``new_section`` fits strictly inside this section."""
        if self.is_sentinel:
            return True
        return self.distance > new_section.distance

    def generate_first_section(self) -> "Section":
        """Build the sentinel that leads into this section."""
        return Section(up_station=None, down_station=self.up_station, distance=0)

    def generate_last_section(self) -> "Section":
        """Build the sentinel that follows this section."""
        return Section(up_station=self.down_station, down_station=None, distance=0)

    def shrink_for(self, new_section: "Section") -> None:
        """
        Make room for a new section that shares one endpoint with this one.

        The shared endpoint moves to the far end of ``new_section`` and, unless
        this section is a sentinel, its distance shrinks by the new section's
        distance in the same step.

        Args:
            new_section: Section being inserted next to this one

        Raises:
            IntegrityError: If the sections share no endpoint
        """
        if self.has_same_up_station_as(new_section):
            self.up_station = new_section.down_station
        elif self.has_same_down_station_as(new_section):
            self.down_station = new_section.up_station
        else:
            raise IntegrityError(f"Section {self!r} shares no endpoint with {new_section!r}")

        if not self.is_sentinel:
            self.distance -= new_section.distance

    def merge_with_previous(self, previous: "Section") -> None:
        """
        Absorb the section that leads into this one before it is removed.

        This section starts where ``previous`` started. The distances add up
        while the merged section is a real one; a section that becomes a
        sentinel drops its distance to zero.

        Args:
            previous: Section whose down station is this section's up station

        Raises:
            IntegrityError: If ``previous`` does not lead into this section
        """
        if not self.is_next_section_of(previous):
            raise IntegrityError(f"Section {previous!r} does not lead into {self!r}")

        self.up_station = previous.up_station
        if self.is_sentinel:
            self.distance = 0
        else:
            self.distance += previous.distance

    def __repr__(self) -> str:
        up = self.up_station.id if self.up_station is not None else None
        down = self.down_station.id if self.down_station is not None else None
        return f"<Section(up={up!r}, down={down!r}, distance={self.distance!r})>"
