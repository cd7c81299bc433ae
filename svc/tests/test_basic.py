import pytest
from fastapi.testclient import TestClient
from prometheus_client import CONTENT_TYPE_LATEST

from main import create_app

from conftest import write_bus


@pytest.fixture
def client(bus_root, make_config):
    write_bus(bus_root, "10-0001\n10-0002\n\n", {"10-0001": "23250\n", "10-0002": "notanumber\n"})
    return TestClient(create_app(make_config()))


def test_health(client, bus_root):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["namespace"] == "onewire"
    assert r.json()["devices_path"] == str(bus_root)


def test_index_links_metrics(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "1-Wire Exporter" in r.text
    assert "href='/metrics'" in r.text


def test_metrics(client):
    r = client.get("/metrics")
    assert r.status_code == 200
    assert r.headers["content-type"] == CONTENT_TYPE_LATEST
    assert 'onewire_temperature_celcius{sensor_id="10-0001",sensor_name="10-0001"} 23.25' in r.text
    # The unparseable sensor is dropped, not reported as an error
    assert "10-0002" not in r.text


def test_metrics_without_bus_is_still_ok(make_config, tmp_path):
    client = TestClient(create_app(make_config(devices_path=str(tmp_path / "missing"))))
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "# TYPE onewire_temperature_celcius gauge" in r.text
    assert "sensor_id=" not in r.text


def test_each_request_rescrapes(client, bus_root):
    assert "23.25" in client.get("/metrics").text
    (bus_root / "10-0001" / "temperature").write_text("19000\n")
    assert "19.0" in client.get("/metrics").text


def test_sensors(client):
    r = client.get("/sensors")
    assert r.status_code == 200
    assert r.json() == [
        {"sensor_id": "10-0001", "sensor_name": "10-0001", "temperature_celsius": 23.25}
    ]


def test_custom_metrics_path(bus_root, make_config):
    write_bus(bus_root, "10-0001\n", {"10-0001": "23250\n"})
    client = TestClient(create_app(make_config(metrics_path="/probe", namespace="w1")))
    assert client.get("/metrics").status_code == 404
    r = client.get("/probe")
    assert r.status_code == 200
    assert "w1_temperature_celcius" in r.text
