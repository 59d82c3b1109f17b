"""
HTTP tests through the Flask test client.
"""
import io
import os

import pytest

from dao.file_dao import FileDAO


def _upload(client, content, name="well.las"):
    return client.post(
        "/api/files/upload",
        data={"file": (io.BytesIO(content.encode("utf-8")), name)},
        content_type="multipart/form-data",
    )


def _deep_las():
    """GR every 10 ft from 0 to 1000."""
    rows = "\n".join(f"{d:.1f} {d / 10:.1f}" for d in range(0, 1001, 10))
    return f"~C\nDEPT.FT : depth\nGR.API : gamma\n~A\n{rows}\n"


@pytest.fixture
def uploaded(client, sample_las):
    resp = _upload(client, sample_las)
    assert resp.status_code == 201
    return resp.get_json()["data"]


class TestUpload:

    def test_ingest_response(self, uploaded):
        assert uploaded["file_name"] == "well.las"
        assert uploaded["curves"] == ["GR", "RES", "NPHI"]
        assert uploaded["depth_range"] == {"min": 100.0, "max": 102.0}
        assert uploaded["sample_count"] == 10

    def test_round_trip_count(self, client, uploaded):
        resp = client.post("/api/visualization", json={
            "file_id": uploaded["file_id"],
            "curve_names": uploaded["curves"],
            "depth_min": uploaded["depth_range"]["min"],
            "depth_max": uploaded["depth_range"]["max"],
        })
        data = resp.get_json()["data"]
        assert sum(len(points) for points in data.values()) == uploaded["sample_count"]

    def test_stored_copy_written(self, app, uploaded):
        f = FileDAO.get_by_id(uploaded["file_id"])
        assert f.storage_path.startswith(app.config["UPLOAD_FOLDER"])
        assert os.path.isfile(f.storage_path)

    def test_rejects_missing_file(self, client):
        resp = client.post("/api/files/upload", data={}, content_type="multipart/form-data")
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    def test_rejects_wrong_extension(self, client, sample_las):
        resp = _upload(client, sample_las, name="well.pdf")
        assert resp.status_code == 400

    def test_malformed_file_still_ingests_parseable_rows(self, client):
        content = "GR.API\n~A\nnot numbers at all\n10 1\n11\n12 x\n13 3\n"
        resp = _upload(client, content, name="messy.las")
        data = resp.get_json()["data"]
        assert resp.status_code == 201
        assert data["sample_count"] == 2
        assert data["depth_range"] == {"min": 10.0, "max": 13.0}

    def test_file_without_data_section(self, client):
        resp = _upload(client, "~C\nGR.API\n", name="header_only.las")
        data = resp.get_json()["data"]
        assert data["sample_count"] == 0
        assert data["depth_range"] == {"min": None, "max": None}


class TestReads:

    def test_health(self, client):
        assert client.get("/api/health").get_json()["data"] == {"status": "OK"}

    def test_list_files(self, client, uploaded, sample_las):
        _upload(client, sample_las, name="second.las")
        files = client.get("/api/files").get_json()["data"]
        assert [f["name"] for f in files] == ["second.las", "well.las"]
        assert set(files[0]) == {"id", "name", "upload_date"}

    def test_curves_and_depth_range(self, client, uploaded):
        fid = uploaded["file_id"]
        assert client.get(f"/api/files/{fid}/curves").get_json()["data"] == {"curve_names": ["GR", "NPHI", "RES"]}
        assert client.get(f"/api/files/{fid}/depth-range").get_json()["data"] == {"min": 100.0, "max": 102.0}

    def test_unknown_file_is_empty(self, client):
        assert client.get("/api/files/404/curves").get_json()["data"] == {"curve_names": []}
        resp = client.get("/api/files/404/depth-range")
        assert resp.status_code == 200
        assert resp.get_json()["data"] == {"min": None, "max": None}

    def test_depth_window(self, client):
        fid = _upload(client, _deep_las(), name="deep.las").get_json()["data"]["file_id"]
        resp = client.post("/api/visualization", json={
            "file_id": fid, "curve_names": ["GR"], "depth_min": 50, "depth_max": 150,
        })
        points = resp.get_json()["data"]["GR"]
        depths = [p["depth"] for p in points]
        assert depths == [float(d) for d in range(50, 151, 10)]
        assert all(50 <= d <= 150 for d in depths)

    def test_visualization_validation(self, client):
        resp = client.post("/api/visualization", json={"file_id": 1, "curve_names": ["GR"]})
        assert resp.status_code == 400
        resp = client.post("/api/visualization", json={
            "file_id": 1, "curve_names": ["GR"], "depth_min": "a", "depth_max": 3,
        })
        assert resp.status_code == 400

    def test_download_local(self, client, uploaded, sample_las):
        resp = client.get(f"/api/files/{uploaded['file_id']}/download")
        assert resp.status_code == 200
        assert resp.data.decode("utf-8") == sample_las
        resp.close()

    def test_delete(self, client, uploaded):
        fid = uploaded["file_id"]
        assert client.delete(f"/api/files/{fid}").status_code == 200
        assert client.get(f"/api/files/{fid}/curves").get_json()["data"] == {"curve_names": []}
        assert client.delete(f"/api/files/{fid}").status_code == 404


class TestInterpretEndpoints:

    def test_interpret(self, client, uploaded):
        resp = client.post("/api/ai/interpret", json={
            "file_id": uploaded["file_id"], "curve_names": ["GR", "RES"], "depth_min": 100, "depth_max": 102,
        })
        data = resp.get_json()["data"]
        assert resp.status_code == 200
        assert data["interpretations"]["GR"]["statistics"]["count"] == 4
        assert data["interpretations"]["RES"]["statistics"]["minimum"] == "12.10"
        assert data["recommendations"] == []

    def test_interpret_no_data_is_404(self, client, uploaded):
        resp = client.post("/api/ai/interpret", json={
            "file_id": uploaded["file_id"], "curve_names": ["GR"], "depth_min": 0, "depth_max": 1,
        })
        assert resp.status_code == 404
        assert resp.get_json()["message"] == "No data found"

    def test_interpret_requires_curves(self, client):
        resp = client.post("/api/ai/interpret", json={"file_id": 1, "depth_min": 0, "depth_max": 1})
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "curve_names is required"

    def test_chat(self, client, uploaded):
        resp = client.post("/api/ai/chat", json={"message": "What curves are available?", "file_id": uploaded["file_id"]})
        assert resp.get_json()["data"]["reply"] == "Available curves (3): GR, NPHI, RES"

    def test_chat_requires_message(self, client):
        assert client.post("/api/ai/chat", json={"file_id": 1}).status_code == 400
