import pytest
import structlog
from fastapi.testclient import TestClient

from primecount.api import create_app
from primecount.services.run_store import RunStore
from primecount.settings import Settings


@pytest.fixture
def client(tmp_path):
    s = Settings(last=10000, batch_size=1000, db_url=f"sqlite:///{tmp_path / 'api.db'}")
    app = create_app(settings=s, store=RunStore(s.db_url))
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_run_lifecycle(client, capsys):
    r = client.post("/runs", json={"strategy": "threads", "workers": 2})
    assert r.status_code == 201
    jid = r.json()["run_id"]
    assert client.get(f"/runs/{jid}").json()["status"] == "QUEUED"

    r = client.post(f"/runs/{jid}/run")
    body = r.json()
    assert body["ok"] is True
    assert body["primes"] == 1229
    assert body["report"] == "1229 primes."
    assert capsys.readouterr().out == "1229 primes.\n"

    st = client.get(f"/runs/{jid}").json()
    assert st["status"] == "FINISHED"
    assert st["primes"] == 1229
    assert st["last"] == 10000
    assert st["strategy"] == "threads"


def test_create_rejects_bad_config(client):
    r = client.post("/runs", json={"batch_size": 0})
    assert r.status_code == 422
    r = client.post("/runs", json={"first": 10, "last": 10})
    assert r.status_code == 422


def test_unknown_run(client):
    assert client.get("/runs/nope").status_code == 404
    assert client.post("/runs/nope/run").status_code == 404


def test_app_keeps_logs_off_stdout(tmp_path, capsys):
    structlog.reset_defaults()
    s = Settings(last=3000, db_url=f"sqlite:///{tmp_path / 'quiet.db'}")
    client = TestClient(create_app(settings=s))
    assert structlog.is_configured()

    jid = client.post("/runs", json={}).json()["run_id"]
    assert client.post(f"/runs/{jid}/run").json()["primes"] == 430
    assert capsys.readouterr().out == "430 primes.\n"


def test_list_runs(client):
    ids = {client.post("/runs", json={"last": n}).json()["run_id"] for n in (100, 200)}
    listed = client.get("/runs").json()
    assert {r["id"] for r in listed} == ids
    assert all(r["status"] == "QUEUED" for r in listed)
    assert len(client.get("/runs", params={"limit": 1}).json()) == 1
