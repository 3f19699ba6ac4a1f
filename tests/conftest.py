"""Shared pytest fixtures and test utilities for Line-O-Matic tests."""

import os
import tempfile
from typing import Generator

import pytest

from lineomatic.models.chain import SectionChain
from lineomatic.models.section import Section
from lineomatic.models.station import Station
from lineomatic.services.line_service import LineService
from lineomatic.services.station_service import StationService
from lineomatic.storage.database import Database, reset_db


@pytest.fixture(scope="function")
def temp_db() -> Generator[Database, None, None]:
    """
    Create a temporary SQLite database for testing.

    Yields:
        Database instance with tables created
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    reset_db()

    database = Database(f"sqlite:///{db_path}")
    database.create_tables()

    yield database

    # Cleanup
    database.drop_tables()
    database.dispose()
    reset_db()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_session(temp_db):
    """Get a database session from temp_db."""
    with temp_db.session() as session:
        yield session


@pytest.fixture
def station_service(db_session):
    """Create a station service instance."""
    return StationService(db_session)


@pytest.fixture
def line_service(db_session):
    """Create a line service instance."""
    return LineService(db_session)


@pytest.fixture
def sample_stations(station_service) -> dict[str, Station]:
    """Create stations A to E, keyed by name."""
    return {
        name: station_service.create_station(name=name, station_id=f"station-{name.lower()}")
        for name in ["A", "B", "C", "D", "E"]
    }


@pytest.fixture
def sample_line(line_service, sample_stations):
    """Create line 'Red' running A -> C with distance 10."""
    return line_service.create_line(
        name="Red",
        color="bg-red-600",
        up_station_id=sample_stations["A"].id,
        down_station_id=sample_stations["C"].id,
        distance=10,
        line_id="line-red",
    )


class ChainDataGenerator:
    """Utility class for building in-memory stations, sections and chains."""

    @staticmethod
    def station(name: str) -> Station:
        """Create a transient station whose ID is its lowercased name."""
        return Station(id=name.lower(), name=name)

    @staticmethod
    def section(up: Station, down: Station, distance: int) -> Section:
        """Create a transient section."""
        return Section(up_station=up, down_station=down, distance=distance)

    @staticmethod
    def chain(stations: list[Station], distances: list[int]) -> SectionChain:
        """
        Build a chain through ``stations`` in order.

        Args:
            stations: Stations in travel order
            distances: Distance between each consecutive pair

        Returns:
            Chain with len(stations) - 1 real sections
        """
        chain = SectionChain()
        for up, down, distance in zip(stations, stations[1:], distances):
            chain.add(ChainDataGenerator.section(up, down, distance))
        return chain


class AssertionHelpers:
    """Helper functions for test assertions."""

    @staticmethod
    def station_names(stations: list[Station]) -> list[str]:
        return [station.name for station in stations]

    @staticmethod
    def distance_between(chain: SectionChain, up: Station, down: Station) -> int:
        """Return the distance of the section from ``up`` to ``down``."""
        for section in chain.real_sections():
            if section.up_station.id == up.id and section.down_station.id == down.id:
                return section.distance
        raise AssertionError(f"No section from {up.id} to {down.id}")

    @staticmethod
    def assert_chain_invariants(chain: SectionChain):
        """Assert the chain describes one path with positive real distances."""
        assert sum(1 for s in chain if s.is_first) == 1
        assert sum(1 for s in chain if s.is_last) == 1

        stations = chain.stations_in_order()
        assert len({s.id for s in stations}) == len(stations)
        assert len(stations) == len(chain.real_sections()) + 1

        edges = [
            (
                s.up_station.id if s.up_station is not None else None,
                s.down_station.id if s.down_station is not None else None,
            )
            for s in chain
        ]
        assert len(set(edges)) == len(edges)

        for section in chain:
            if section.is_sentinel:
                assert section.distance == 0
            else:
                assert section.distance > 0


# Make utilities available as fixtures
@pytest.fixture
def data():
    """Provide ChainDataGenerator."""
    return ChainDataGenerator


@pytest.fixture
def assertion_helpers():
    """Provide AssertionHelpers."""
    return AssertionHelpers
