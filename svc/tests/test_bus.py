import pytest

from onewire.errors import DirectoryReadError
from onewire.sensors.bus import listing_path, read_sensor_ids

from conftest import write_bus


def test_listing_path(bus_root):
    assert listing_path(str(bus_root)) == str(bus_root / "w1_bus_master1" / "w1_master_slaves")


def test_reads_ids_in_order(bus_root):
    write_bus(bus_root, "28-0000a\n10-0000b\n28-0000c\n", {})
    assert read_sensor_ids(str(bus_root)) == ["28-0000a", "10-0000b", "28-0000c"]


def test_trailing_blank_line_is_not_a_sensor(bus_root):
    write_bus(bus_root, "10-0001\n10-0002\n\n", {})
    ids = read_sensor_ids(str(bus_root))
    assert ids == ["10-0001", "10-0002"]
    assert "" not in ids


def test_empty_listing(bus_root):
    write_bus(bus_root, "", {})
    assert read_sensor_ids(str(bus_root)) == []


def test_ids_are_not_validated(bus_root):
    write_bus(bus_root, "not a sensor\n", {})
    assert read_sensor_ids(str(bus_root)) == ["not a sensor"]


def test_missing_listing_raises(bus_root):
    with pytest.raises(DirectoryReadError):
        read_sensor_ids(str(bus_root))


def test_whitespace_ids_kept_verbatim(bus_root):
    write_bus(bus_root, "10-0001\n \n10-0002 \n", {})
    assert read_sensor_ids(str(bus_root)) == ["10-0001", " ", "10-0002 "]
