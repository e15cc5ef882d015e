import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from pydantic import BaseModel

from shared.api import register_exception_handlers, require_admin


class Quantity(BaseModel):
    amount: int


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    errors = {
        "validation": ValidationError({"name": ["Name is required"]}),
        "missing": ObjectNotFoundError({"_entity": ["Order o-1 does not exist"]}),
        "invalid": InvalidOperationError({"_entity": ["Order is already paid"]}),
    }

    @app.get("/boom/{kind}")
    async def boom(kind: str):
        if kind == "model":
            Quantity(amount="many")
        raise errors[kind]

    @app.get("/admin-only", dependencies=[Depends(require_admin)])
    async def admin_only():
        return {"ok": True}

    return app


@pytest.fixture()
def api():
    return TestClient(_build_app())


@pytest.mark.parametrize(
    "kind, status",
    [("validation", 400), ("model", 400), ("missing", 404), ("invalid", 422)],
)
def test_domain_errors_map_to_status_codes(api, kind, status):
    assert api.get(f"/boom/{kind}").status_code == status


def test_validation_error_body_lists_field_messages(api):
    assert api.get("/boom/validation").json() == {"error": {"name": ["Name is required"]}}
    assert list(api.get("/boom/model").json()["error"]) == ["amount"]


def test_admin_guard_open_without_secret_outside_production(api, monkeypatch):
    monkeypatch.delenv("ADMIN_SECRET", raising=False)
    assert api.get("/admin-only").status_code == 200


def test_admin_guard_closed_in_production_without_secret(api, monkeypatch):
    monkeypatch.delenv("ADMIN_SECRET", raising=False)
    monkeypatch.setenv("PROTEAN_ENV", "production")
    assert api.get("/admin-only").status_code == 403


def test_admin_guard_checks_header(api, monkeypatch):
    monkeypatch.setenv("ADMIN_SECRET", "s3cret")
    assert api.get("/admin-only").status_code == 401
    assert api.get("/admin-only", headers={"X-Admin-Secret": "wrong"}).status_code == 401
    assert api.get("/admin-only", headers={"X-Admin-Secret": "s3cret"}).status_code == 200
