"""Basic usage example for Line-O-Matic services."""

from lineomatic.storage import Database
from lineomatic.services import LineService, StationService


def main():
    """Build a small line, split a section, then remove a station."""
    # Initialize database (uses SQLite by default)
    db = Database()
    db.create_tables()

    with db.session() as session:
        stations = StationService(session)
        lines = LineService(session)

        gangnam = stations.create_station("Gangnam")
        yeoksam = stations.create_station("Yeoksam")
        seolleung = stations.create_station("Seolleung")
        samseong = stations.create_station("Samseong")

        line = lines.create_line(
            name="Line 2",
            color="bg-green-600",
            up_station_id=gangnam.id,
            down_station_id=seolleung.id,
            distance=10,
        )
        print(f"Created line: {line.name} (ID: {line.id})")

        # Split Gangnam -> Seolleung (10) into Gangnam -> Yeoksam (4) and Yeoksam -> Seolleung (6)
        lines.add_section(line.id, gangnam.id, yeoksam.id, 4)
        # Extend the line at its end
        lines.add_section(line.id, seolleung.id, samseong.id, 7)
        print("Stations:", [s.name for s in lines.get_stations_in_order(line.id)])

        lines.remove_station(line.id, yeoksam.id)
        print("After removing Yeoksam:", [s.name for s in lines.get_stations_in_order(line.id)])


if __name__ == "__main__":
    main()
