import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    return TestClient(app)


DIM = {"light": 100, "co2": 800, "temperature": 25}


def test_presets_listing(client):
    response = client.get("/presets")
    assert response.status_code == 200
    keys = [preset["key"] for preset in response.json()["presets"]]
    assert "drought" in keys
    assert len(keys) == 5


def test_optimal_values(client):
    body = client.get("/optimal").json()
    assert body["optimal"] == {"light": 800.0, "co2": 400.0, "temperature": 25.0}
    assert body["temperature_range"]["max"] == 45.0


def test_rate(client):
    response = client.post("/rate", json={"factors": DIM})
    assert response.status_code == 200
    result = response.json()["result"]
    assert result["rate"] == pytest.approx(100 / 340)
    assert result["normalized_factors"]["light"] == result["rate"]


def test_rate_accepts_percent_light(client):
    response = client.post("/rate", json={"factors": {"light": 50, "light_unit": "percent"}})
    assert response.status_code == 200
    assert response.json()["factors"]["light"] == pytest.approx(500.0)


def test_rate_from_preset(client):
    response = client.post("/rate", json={"factors": {"preset": "drought"}})
    assert response.json()["factors"]["temperature"] == 38.0


def test_unknown_preset_is_404(client):
    response = client.post("/rate", json={"factors": {"preset": "desert"}})
    assert response.status_code == 404


def test_unknown_parameter_is_400(client):
    response = client.post("/rate", json={"factors": DIM, "params": {"soil_moisture": 0.2}})
    assert response.status_code == 400
    assert "soil_moisture" in response.json()["detail"]


@pytest.mark.parametrize("path", ["/rate", "/analysis", "/simulate"])
@pytest.mark.parametrize("params", [{"temperature_spread": 0}, {"optimal_co2": 0}, {"optimal_light": -1}])
def test_degenerate_parameter_is_400(client, path, params):
    response = client.post(path, json={"factors": DIM, "params": params})
    assert response.status_code == 400
    assert next(iter(params)) in response.json()["detail"]


def test_non_numeric_input_is_rejected(client):
    response = client.post("/rate", json={"factors": {"light": "bright"}})
    assert response.status_code == 422


def test_analysis(client):
    body = client.post("/analysis", json={"factors": DIM}).json()
    assert body["limiting"]["factor"] == "light"
    assert body["limiting"]["severity"] == "severe"
    assert body["recommendation"]["priority"] == "critical"
    assert body["recommendation"]["target_value"] == 600.0
    assert [action["factor"] for action in body["priority_actions"]] == ["light", "co2", "temperature"]
    assert body["breakdown"]["factors"]["light"]["status"] == "limiting"


def test_validate_change_infers_limiting_factor(client):
    payload = {
        "factor": "co2",
        "proposed_value": 600,
        "factors": {"light": 100, "co2": 400, "temperature": 25},
    }
    body = client.post("/validate-change", json=payload).json()
    assert body["limiting_factor"] == "light"
    assert body["validation"]["will_improve"] is False


def test_validate_change_with_explicit_limiting_factor(client):
    payload = {
        "factor": "temperature",
        "proposed_value": 22,
        "factors": {"light": 800, "co2": 800, "temperature": 10},
        "current_limiting_factor": "temperature",
    }
    body = client.post("/validate-change", json=payload).json()
    assert body["validation"]["will_improve"] is True


def test_simulate(client):
    body = client.post("/simulate", json={"factors": {"light": 500, "co2": 400, "temperature": 25}, "days": 10}).json()
    days = body["trajectory"]["days"]
    assert [day["day"] for day in days] == list(range(1, 11))
    assert days[0]["limiting_factor"] == "co2"
    assert body["summary"]["days"] == 10
    assert body["summary"]["most_common_limiting_factor"] == "co2"


def test_simulate_zero_days(client):
    body = client.post("/simulate", json={"days": 0}).json()
    assert body["trajectory"]["days"] == []
    assert body["summary"] is None


def test_simulate_rejects_negative_days(client):
    assert client.post("/simulate", json={"days": -1}).status_code == 422


def test_seasonal_simulation(client):
    payload = {"factors": {"light": 800, "co2": 400, "temperature": 20}, "days": 30, "days_per_cycle": 30}
    body = client.post("/simulate/seasonal", json=payload).json()
    temperatures = [day["conditions"]["temperature"] for day in body["trajectory"]["days"]]
    assert len(temperatures) == 30
    assert max(temperatures) > 29
    assert min(temperatures) < 11


def test_compare_identical_scenarios(client):
    scenario = {"light": 500, "co2": 400, "temperature": 25}
    body = client.post("/compare", json={"baseline": scenario, "alternative": scenario, "days": 10}).json()
    assert body["comparison"]["biomass_difference"] == 0
    assert body["comparison"]["better_scenario"] is None


def test_compare_presets(client):
    payload = {"baseline": {"preset": "drought"}, "alternative": {"preset": "greenhouse"}, "days": 20}
    body = client.post("/compare", json=payload).json()
    assert body["comparison"]["better_scenario"] == "alternative"
