"""Tests for the Flask blueprints."""

import base64

from backend.core import config


class TestVisualizations:
    def test_list(self, client):
        resp = client.get("/visualizations")
        assert resp.status_code == 200
        ids = [v["id"] for v in resp.get_json()]
        assert ids == [
            "accident-circumstances",
            "traffic-volume",
            "accident-map",
            "when-dashboard",
            "how-dashboard",
        ]

    def test_show_generated(self, client):
        resp = client.get("/visualizations/accident-circumstances")
        data = resp.get_json()
        assert resp.status_code == 200
        assert data["kind"] == "race"
        assert data["embed"] is None
        assert "bar chart race" in data["details"]

    def test_show_tableau(self, client):
        data = client.get("/visualizations/when-dashboard").get_json()
        assert "tableauViz" in data["embed"]
        assert "whenaccidents/WHENDashboard" in data["embed"]

    def test_show_iframe(self, client):
        data = client.get("/visualizations/accident-map").get_json()
        assert '<iframe src="map.html"' in data["embed"]

    def test_unknown(self, client):
        resp = client.get("/visualizations/nope")
        assert resp.status_code == 404
        assert "error" in resp.get_json()


class TestRaceKeyframes:
    def test_keyframes(self, client):
        resp = client.post(
            "/race/keyframes",
            json={"sub_steps": 1, "cutoff_date": "2015-02-28"},
        )
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["top_n"] == 10
        assert data["duration_ms"] == 100
        assert [k["date"][:10] for k in data["keyframes"]] == ["2015-01-31", "2015-02-28"]
        assert data["keyframes"][-1]["entries"][:2] == [
            {"category": "Speeding", "value": 2.0, "rank": 0},
            {"category": "Distraction", "value": 1.0, "rank": 1},
        ]

    def test_bad_params(self, client):
        resp = client.post("/race/keyframes", json={"top_n": 0})
        assert resp.status_code == 400

    def test_missing_dataset(self, client, monkeypatch, tmp_path):
        monkeypatch.setattr(config, "ACCIDENTS_CSV", str(tmp_path / "missing.csv"))
        resp = client.post("/race/keyframes", json={})
        assert resp.status_code == 404


class TestGenerateImage:
    def test_final_frame(self, client):
        resp = client.post("/generate_image", json={"sub_steps": 1})
        assert resp.status_code == 200
        data = resp.get_json()
        assert base64.b64decode(data["image"])[:2] == b"\xff\xd8"
        assert data["filename"].endswith(".jpg")


class TestGenerateHistogram:
    def test_total(self, client):
        resp = client.post("/generate_histogram", json={"mode": "Total"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["years"] == [2015, 2016]
        assert data["filename"] == "speed_limit_total.jpg"
        assert base64.b64decode(data["image"])[:2] == b"\xff\xd8"

    def test_compare(self, client):
        resp = client.post("/generate_histogram", json={"mode": "Compare"})
        assert resp.status_code == 200
        assert resp.get_json()["filename"] == "speed_limit_compare.jpg"

    def test_same_years(self, client):
        resp = client.post(
            "/generate_histogram", json={"mode": "Compare", "year1": 2015, "year2": 2015}
        )
        assert resp.status_code == 400


class TestGenerateAnimation:
    def test_gif(self, client):
        resp = client.post(
            "/generate_animation",
            json={"sub_steps": 1, "cutoff_date": "2015-03-31", "dpi": 10, "fps": 20},
        )
        assert resp.status_code == 200
        data = resp.get_json()
        assert base64.b64decode(data["video"])[:4] == b"GIF8"
        assert data["filename"].endswith(".gif")

    def test_too_many_keyframes(self, client, monkeypatch):
        monkeypatch.setattr(config, "MAX_ANIMATION_KEYFRAMES", 2)
        resp = client.post(
            "/generate_animation", json={"sub_steps": 1, "cutoff_date": "2015-03-31"}
        )
        assert resp.status_code == 400
        assert "Too many keyframes" in resp.get_json()["error"]

    def test_bad_fps(self, client):
        resp = client.post("/generate_animation", json={"fps": 0})
        assert resp.status_code == 400


class TestErrors:
    def test_unknown_route_is_json(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}

    def test_wrong_method(self, client):
        resp = client.get("/generate_image")
        assert resp.status_code == 405


class TestZonedDataset:
    def test_keyframes_from_zoned_dates(self, client, monkeypatch, tmp_path):
        path = tmp_path / "zoned.csv"
        path.write_text(
            "circumstance,crash_date_time\n"
            "Speeding,2015-01-15T08:00:00Z\n"
            "Distraction,2015-02-20T12:00:00+01:00\n"
        )
        monkeypatch.setattr(config, "ACCIDENTS_CSV", str(path))
        resp = client.post("/race/keyframes", json={"sub_steps": 1, "cutoff_date": "2015-02-28"})
        assert resp.status_code == 200
        assert len(resp.get_json()["keyframes"]) == 2
