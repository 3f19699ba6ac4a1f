"""Ordered section chain of a single line."""

from typing import Iterator, Optional

from lineomatic.exceptions import (
    ChainTooShortError,
    CyclicSectionError,
    DisconnectedSectionError,
    DistanceError,
    DuplicateSectionError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from lineomatic.models.section import Section
from lineomatic.models.station import Station


class SectionChain:
    """Keeps the sections of one line as a single path without branches or cycles.

    The chain wraps a list owned by the caller (``Line.sections`` for persisted
    lines) and mutates it in place. Two sentinel sections frame the path: the
    first has no up station and the last has no down station, so every real
    station is the down station of exactly one section.

    Every mutation validates completely before it touches the list, so a
    rejected ``add`` or ``remove_by_down_station`` leaves the chain unchanged.
    """

    # Both sentinels plus a single real section
    BOOTSTRAPPED_SIZE = 3

    def __init__(self, sections: list[Section] | None = None):
        self.sections = sections if sections is not None else []

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    @property
    def is_empty(self) -> bool:
        return not self.sections

    def real_sections(self) -> list[Section]:
        """Sections between the two sentinels, in storage order."""
        return [section for section in self.sections if not section.is_sentinel]

    def first_section(self) -> Section:
        """
        Get the sentinel section that starts the line.

        Raises:
            NotFoundError: If the chain has no first section
        """
        for section in self.sections:
            if section.is_first:
                return section
        raise NotFoundError("Section", "first", "First section of the line not found")

    def last_section(self) -> Section:
        """
        Get the sentinel section that ends the line.

        Raises:
            NotFoundError: If the chain has no last section
        """
        for section in self.sections:
            if section.is_last:
                return section
        raise NotFoundError("Section", "last", "Last section of the line not found")

    def stations_in_order(self) -> list[Station]:
        """
        Get the stations of the line in travel order.

        Storage order is irrelevant; the order comes from following each
        section's down station to the section that starts there.

        Returns:
            Stations from the first stop to the last stop

        Raises:
            IntegrityError: If the chain has no first section, a link is
                missing, or a station is reached twice
        """
        first = next((section for section in self.sections if section.is_first), None)
        if first is None:
            raise IntegrityError("Section chain has no first section")

        outgoing = {
            section.up_station.id: section for section in self.sections if not section.is_first
        }

        stations: list[Station] = []
        visited: set[str] = set()
        current = first
        while not current.is_last:
            station = current.down_station
            if station.id in visited:
                raise IntegrityError(f"Station '{station.id}' is reached twice in the chain")
            visited.add(station.id)
            stations.append(station)

            current = outgoing.get(station.id)
            if current is None:
                raise IntegrityError(f"No section continues from station '{station.id}'")

        return stations

    def add(self, new_section: Section) -> None:
        """
        Insert a section into the line.

        An empty chain is bootstrapped with two sentinels around the new
        section. Otherwise the section is placed next to the existing section
        that shares its up or down station, which shrinks to make room: the
        line is extended at either end or an existing section is split.

        Args:
            new_section: Section to insert

        Raises:
            ValidationError: If the section is missing a station or loops on one station
            DistanceError: If the distance is not positive or does not fit the split section
            DuplicateSectionError: If the same section already exists
            CyclicSectionError: If both stations are already on the line
            DisconnectedSectionError: If the section shares no station with the line
        """
        self._validate_section(new_section)

        if self.is_empty:
            self.sections.extend(
                [
                    new_section.generate_first_section(),
                    new_section,
                    new_section.generate_last_section(),
                ]
            )
            return

        target = self._find_section_to_insert(new_section)
        if target is None:
            raise DisconnectedSectionError(
                new_section.up_station.id, new_section.down_station.id
            )

        self._check_duplication(target, new_section)
        self._check_cycle(new_section)
        self._check_distance(target, new_section)

        target.shrink_for(new_section)
        self.sections.append(new_section)

    def remove_by_down_station(self, station: Station) -> Section:
        """
        Remove a station from the line.

        The section ending at the station is dropped and the section starting
        there is re-linked to begin where the dropped one began.

        Args:
            station: Station to remove

        Returns:
            The section that was dropped from the chain

        Raises:
            ChainTooShortError: If only one real section is left
            NotFoundError: If the station is not on the line
        """
        if len(self.sections) <= self.BOOTSTRAPPED_SIZE:
            raise ChainTooShortError()

        target = self._find_by_down_station(station)
        following = self._next_section_of(target)

        following.merge_with_previous(target)
        self.sections.remove(target)
        return target

    def _find_by_down_station(self, station: Station) -> Section:
        for section in self.sections:
            if not section.is_last and section.down_station.id == station.id:
                return section
        raise NotFoundError("Station", station.id, f"Station '{station.id}' is not on the line")

    def _next_section_of(self, previous: Section) -> Section:
        for section in self.sections:
            if section.is_next_section_of(previous):
                return section
        raise NotFoundError(
            "Section",
            previous.down_station.id,
            f"No section starts at station '{previous.down_station.id}'",
        )

    def _find_section_to_insert(self, new_section: Section) -> Optional[Section]:
        for section in self.sections:
            if section.has_same_up_station_as(new_section) or section.has_same_down_station_as(
                new_section
            ):
                return section
        return None

    def _contains_station(self, station: Station) -> bool:
        return any(section.has_station(station) for section in self.sections)

    @staticmethod
    def _validate_section(new_section: Optional[Section]) -> None:
        if new_section is None:
            raise ValidationError("Section to add is required", "section")
        if new_section.up_station is None or new_section.down_station is None:
            raise ValidationError("Section needs both an up and a down station", "section")
        if new_section.up_station.id == new_section.down_station.id:
            raise ValidationError("Section cannot start and end at the same station", "section")
        distance = new_section.distance
        if not isinstance(distance, int) or isinstance(distance, bool) or distance <= 0:
            raise DistanceError(f"Distance must be a positive integer, got {distance!r}")

    @staticmethod
    def _check_duplication(target: Section, new_section: Section) -> None:
        if target.has_same_up_station_as(new_section) and target.has_same_down_station_as(
            new_section
        ):
            raise DuplicateSectionError(new_section.up_station.id, new_section.down_station.id)

    def _check_cycle(self, new_section: Section) -> None:
        if self._contains_station(new_section.up_station) and self._contains_station(
            new_section.down_station
        ):
            raise CyclicSectionError(new_section.up_station.id, new_section.down_station.id)

    @staticmethod
    def _check_distance(target: Section, new_section: Section) -> None:
        if not target.can_insert(new_section):
            raise DistanceError(
                f"Distance {new_section.distance} must be shorter than the "
                f"{target.distance} of the section it splits"
            )
