"""Tests for line service CRUD operations and persisted section chains."""

import pytest

pytestmark = pytest.mark.unit

from lineomatic.exceptions import (
    ChainTooShortError,
    CyclicSectionError,
    DisconnectedSectionError,
    DistanceError,
    DuplicateError,
    DuplicateSectionError,
    NotFoundError,
    ValidationError,
)
from lineomatic.services.line_service import LineService
from lineomatic.services.station_service import StationService
from lineomatic.storage.repositories import SectionRepository


def names(stations):
    return [station.name for station in stations]


class TestCreateLine:
    """Tests for line creation."""

    def test_create_line_basic(self, sample_line, line_service):
        """Test that a new line holds its first section."""
        assert sample_line.id == "line-red"
        assert sample_line.name == "Red"
        assert sample_line.color == "bg-red-600"
        assert len(sample_line.sections) == 3
        assert names(line_service.get_stations_in_order(sample_line.id)) == ["A", "C"]

    def test_create_line_generates_id(self, line_service, sample_stations):
        """Test that a UUID is generated when no line ID is given."""
        line = line_service.create_line(
            name="Blue",
            color="bg-blue-600",
            up_station_id=sample_stations["B"].id,
            down_station_id=sample_stations["D"].id,
            distance=7,
        )
        assert line.id
        assert line.id != "line-red"

    def test_create_line_duplicate_name(self, line_service, sample_line, sample_stations):
        """Test that line names are unique."""
        with pytest.raises(DuplicateError) as exc_info:
            line_service.create_line(
                name="Red",
                color="bg-red-100",
                up_station_id=sample_stations["B"].id,
                down_station_id=sample_stations["D"].id,
                distance=3,
            )
        assert exc_info.value.field == "name"

    def test_create_line_duplicate_id(self, line_service, sample_line, sample_stations):
        """Test that line IDs are unique."""
        with pytest.raises(DuplicateError):
            line_service.create_line(
                name="Green",
                color="bg-green-600",
                up_station_id=sample_stations["B"].id,
                down_station_id=sample_stations["D"].id,
                distance=3,
                line_id="line-red",
            )

    def test_create_line_unknown_station(self, line_service, sample_stations):
        """Test that both stations must exist."""
        with pytest.raises(NotFoundError) as exc_info:
            line_service.create_line(
                name="Green",
                color="bg-green-600",
                up_station_id=sample_stations["A"].id,
                down_station_id="missing",
                distance=3,
            )
        assert exc_info.value.resource_type == "Station"
        assert line_service.list_lines() == []

    def test_create_line_validation_errors(self, line_service, sample_stations):
        """Test line creation validation errors."""
        a, b = sample_stations["A"].id, sample_stations["B"].id

        with pytest.raises(ValidationError) as exc_info:
            line_service.create_line("", "red", a, b, 3)
        assert exc_info.value.field == "name"

        with pytest.raises(ValidationError) as exc_info:
            line_service.create_line("Green", "", a, b, 3)
        assert exc_info.value.field == "color"

        with pytest.raises(ValidationError):
            line_service.create_line("Green", "green", a, a, 3)

        with pytest.raises(DistanceError):
            line_service.create_line("Green", "green", a, b, 0)


class TestReadLines:
    """Tests for reading and listing lines."""

    def test_get_line_not_found(self, line_service):
        """Test getting a missing line."""
        with pytest.raises(NotFoundError):
            line_service.get_line("missing")

    def test_list_lines(self, line_service, sample_line, sample_stations):
        """Test that lines are listed by name."""
        line_service.create_line(
            "Blue", "bg-blue-600", sample_stations["B"].id, sample_stations["D"].id, 4
        )
        assert [line.name for line in line_service.list_lines()] == ["Blue", "Red"]
        assert [line.name for line in line_service.list_lines(limit=1, offset=1)] == ["Red"]

    def test_list_lines_negative_limit(self, line_service):
        """Test pagination validation."""
        with pytest.raises(ValidationError):
            line_service.list_lines(limit=-1)


class TestUpdateAndDeleteLine:
    """Tests for updating and deleting lines."""

    def test_update_line(self, line_service, sample_line):
        """Test renaming and recoloring a line."""
        line = line_service.update_line(sample_line.id, name="Crimson", color="bg-red-900")
        assert line.name == "Crimson"
        assert line.color == "bg-red-900"

    def test_update_line_duplicate_name(self, line_service, sample_line, sample_stations):
        """Test that a line cannot take another line's name."""
        other = line_service.create_line(
            "Blue", "bg-blue-600", sample_stations["B"].id, sample_stations["D"].id, 4
        )
        with pytest.raises(DuplicateError):
            line_service.update_line(other.id, name="Red")

    def test_delete_line_removes_sections(self, line_service, sample_line, db_session):
        """Test that deleting a line deletes its sections."""
        assert line_service.delete_line(sample_line.id) is True
        assert SectionRepository(db_session).get_by_line_id("line-red") == []
        assert line_service.delete_line(sample_line.id) is False


class TestSectionChain:
    """Tests for adding sections and removing stations through the service."""

    def test_split_section(self, line_service, sample_line, sample_stations):
        """Test A->C (10) split by A->B (4)."""
        line = line_service.add_section(
            sample_line.id, sample_stations["A"].id, sample_stations["B"].id, 4
        )
        assert names(line.stations_in_order()) == ["A", "B", "C"]
        distances = {
            (s.up_station.name, s.down_station.name): s.distance
            for s in line.chain.real_sections()
        }
        assert distances == {("A", "B"): 4, ("B", "C"): 6}

    def test_extend_both_ends(self, line_service, sample_line, sample_stations):
        """Test prepending and appending sections."""
        line_service.add_section(sample_line.id, sample_stations["D"].id, sample_stations["A"].id, 8)
        line_service.add_section(sample_line.id, sample_stations["C"].id, sample_stations["E"].id, 2)
        assert names(line_service.get_stations_in_order(sample_line.id)) == ["D", "A", "C", "E"]

    def test_add_section_rejections(self, line_service, sample_line, sample_stations):
        """Test that invalid sections are rejected and the line is unchanged."""
        a, b, c, d, e = (sample_stations[n].id for n in "ABCDE")

        with pytest.raises(DistanceError):
            line_service.add_section(sample_line.id, a, b, 10)
        with pytest.raises(DuplicateSectionError):
            line_service.add_section(sample_line.id, a, c, 3)
        with pytest.raises(DisconnectedSectionError):
            line_service.add_section(sample_line.id, d, e, 3)
        with pytest.raises(CyclicSectionError):
            line_service.add_section(sample_line.id, c, a, 3)

        line = line_service.get_line(sample_line.id)
        assert names(line.stations_in_order()) == ["A", "C"]
        assert [s.distance for s in line.chain.real_sections()] == [10]

    def test_add_section_unknown_line_or_station(self, line_service, sample_line, sample_stations):
        """Test missing line and station references."""
        with pytest.raises(NotFoundError):
            line_service.add_section("missing", sample_stations["A"].id, sample_stations["B"].id, 3)
        with pytest.raises(NotFoundError):
            line_service.add_section(sample_line.id, sample_stations["A"].id, "missing", 3)

    def test_remove_station(self, line_service, sample_line, sample_stations, db_session):
        """Test removing a middle station joins its sections."""
        line_service.add_section(sample_line.id, sample_stations["A"].id, sample_stations["B"].id, 4)

        line = line_service.remove_station(sample_line.id, sample_stations["B"].id)

        assert names(line.stations_in_order()) == ["A", "C"]
        assert [s.distance for s in line.chain.real_sections()] == [10]
        assert len(SectionRepository(db_session).get_by_line_id(sample_line.id)) == 3

    def test_remove_station_from_single_section(self, line_service, sample_line, sample_stations):
        """Test that a line keeps at least one section."""
        with pytest.raises(ChainTooShortError):
            line_service.remove_station(sample_line.id, sample_stations["C"].id)

    def test_remove_station_not_on_line(self, line_service, sample_line, sample_stations):
        """Test removing a station the line does not pass through."""
        line_service.add_section(sample_line.id, sample_stations["C"].id, sample_stations["D"].id, 5)

        with pytest.raises(NotFoundError):
            line_service.remove_station(sample_line.id, sample_stations["E"].id)

        assert names(line_service.get_stations_in_order(sample_line.id)) == ["A", "C", "D"]


class TestPersistence:
    """Tests that chain changes survive a new session."""

    def test_chain_survives_new_session(self, temp_db):
        """Test that splits and removals are committed."""
        with temp_db.session() as session:
            stations = StationService(session)
            for name in ["Gangnam", "Yeoksam", "Seolleung", "Samseong"]:
                stations.create_station(name, station_id=name.lower())
            lines = LineService(session)
            lines.create_line("Line 2", "green", "gangnam", "seolleung", 10, line_id="line-2")
            lines.add_section("line-2", "gangnam", "yeoksam", 4)
            lines.add_section("line-2", "seolleung", "samseong", 6)

        with temp_db.session() as session:
            stations = LineService(session).get_stations_in_order("line-2")
            assert names(stations) == ["Gangnam", "Yeoksam", "Seolleung", "Samseong"]

        with temp_db.session() as session:
            LineService(session).remove_station("line-2", "gangnam")

        with temp_db.session() as session:
            line = LineService(session).get_line("line-2")
            assert names(line.stations_in_order()) == ["Yeoksam", "Seolleung", "Samseong"]
            assert line.chain.first_section().distance == 0
            assert sorted(s.distance for s in line.chain.real_sections()) == [6, 6]
