"""Shared fixtures: a Flask app on a throwaway SQLite file and upload folder."""
import os

# Must be set before extensions.py is imported
os.environ.setdefault("SOCKETIO_ASYNC_MODE", "threading")

import pytest

from app import create_app
from models import db, SampleRecord
from dao.file_dao import FileDAO
from dao.sample_dao import SampleDAO


SAMPLE_LAS = """~VERSION INFORMATION
 VERS.                  2.0 :   CWLS LOG ASCII STANDARD -VERSION 2.0
 WRAP.                  NO  :   ONE LINE PER DEPTH STEP
~WELL INFORMATION
 STRT.FT            100.0000 : START DEPTH
 STOP.FT            102.0000 : STOP DEPTH
 NULL.              -999.25  : NULL VALUE
 WELL.               TEST-1  : WELL
~CURVE INFORMATION
 DEPT.FT                     : DEPTH
 GR  .API                    : GAMMA RAY
 RES .OHMM                   : RESISTIVITY
 NPHI.V/V                    : NEUTRON POROSITY
~PARAMETER INFORMATION
 BHT .DEGF            150.0  : BOTTOM HOLE TEMP
~A  DEPTH   GR   RES   NPHI
100.0  55.2  12.1  0.21
100.5  60.1  abc   0.22
101.0  70.3  14.0
# comment inside data
101.5
bad 1 2 3
102.0  80.0  15.5  0.25  99.0
"""


@pytest.fixture
def sample_las():
    return SAMPLE_LAS


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "STORAGE_BACKEND": "local",
        "SAMPLE_BATCH_SIZE": 3,
        "LOG_LEVEL": "DEBUG",
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_file(app, tmp_path):
    """Create a file row with the given samples; returns the file id."""
    def _make(samples=(), name="well.las", uploaded_at=None):
        f = FileDAO.create(name, str(tmp_path / name), uploaded_at=uploaded_at)
        SampleDAO.bulk_insert(f.id, [SampleRecord(*s) for s in samples])
        return f.id
    return _make
