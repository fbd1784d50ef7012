"""
Unit tests for Gateway record routes.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from service_gateway.app.main import GatewayService
from shared.config import ServiceConfig
from shared.errors import RpcCode, RpcError
from shared.rpc_messages import (
    RecordFields, RecordMessage,
    CreateRecordResponse, GetRecordResponse, UpdateRecordResponse,
)


@pytest.fixture
def records_client():
    """Mock records RPC client."""
    return AsyncMock()


@pytest.fixture
def gateway(records_client):
    """Create GatewayService wired to the mock client."""
    config = ServiceConfig(service_name="gateway", records_service_url="http://records:50051")
    return GatewayService(config, records_client=records_client)


@pytest.fixture
def client(gateway):
    """Create test client."""
    return TestClient(gateway.app)


@pytest.fixture
def stored_record():
    return RecordMessage(id=1, first_name="Cool", last_name="Kid", age=10, token="valid_token")


AUTH = {"Authorization": "Bearer valid_token"}
BODY = {"id": 1, "first_name": "Cool", "last_name": "Kid", "age": 10}


class TestGatewayBasics:
    """Test cases for common gateway endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "gateway"
        assert data["upstream"] == "http://records:50051"

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["service"] == "gateway"

    def test_service_exposed_on_app_state(self, gateway):
        assert gateway.app.state.gateway_service is gateway


class TestCreateRecordRoute:
    """Test cases for POST /record."""

    def test_create_success(self, client, records_client, stored_record):
        records_client.create_record.return_value = CreateRecordResponse(
            record=stored_record, token="valid_token", message="Created user successfully"
        )

        response = client.post("/record", json=BODY)

        assert response.status_code == 200
        data = response.json()
        assert data == {
            "record": {"id": 1, "first_name": "Cool", "last_name": "Kid", "age": 10},
            "token": "valid_token",
            "message": "Created user successfully",
        }
        records_client.create_record.assert_awaited_once_with(RecordFields(**BODY))

    def test_create_omits_absent_record(self, client, records_client):
        records_client.create_record.return_value = CreateRecordResponse(
            token="valid_token", message="Created user successfully"
        )

        response = client.post("/record", json=BODY)

        assert response.status_code == 200
        assert "record" not in response.json()

    def test_create_bad_json(self, client, records_client):
        response = client.post("/record", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Error decoding JSON"
        records_client.create_record.assert_not_called()

    @pytest.mark.parametrize("overrides", [
        {"id": 2 ** 63},
        {"age": 2 ** 31},
        {"age": True},
        {"age": "7"},
    ])
    def test_create_rejects_out_of_schema_values(self, client, records_client, overrides):
        response = client.post("/record", json={**BODY, **overrides})

        assert response.status_code == 400
        assert response.json()["detail"] == "Error decoding JSON"
        records_client.create_record.assert_not_called()

    def test_create_invalid_argument_is_400(self, client, records_client):
        records_client.create_record.side_effect = RpcError(RpcCode.INVALID_ARGUMENT, "Invalid user data")

        response = client.post("/record", json={"id": 2, "first_name": "User", "last_name": "Name", "age": 0})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid user data"

    @pytest.mark.parametrize("code", [RpcCode.INTERNAL, RpcCode.UNKNOWN])
    def test_create_failures_are_500(self, client, records_client, code):
        records_client.create_record.side_effect = RpcError(code, "boom")

        response = client.post("/record", json=BODY)

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal Server Error"

    def test_gateway_survives_failure(self, client, records_client, stored_record):
        records_client.create_record.side_effect = RpcError(RpcCode.INTERNAL, "boom")
        assert client.post("/record", json=BODY).status_code == 500

        records_client.create_record.side_effect = None
        records_client.create_record.return_value = CreateRecordResponse(
            record=stored_record, token="t", message="Created user successfully"
        )
        assert client.post("/record", json=BODY).status_code == 200


class TestGetRecordRoute:
    """Test cases for GET /record/{id}."""

    def test_get_success(self, client, records_client, stored_record):
        records_client.get_record.return_value = GetRecordResponse(record=stored_record)

        response = client.get("/record/1", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"id": 1, "first_name": "Cool", "last_name": "Kid", "age": 10}
        records_client.get_record.assert_awaited_once_with(1, "valid_token")

    def test_get_without_authorization(self, client, records_client):
        response = client.get("/record/1")

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized: Bearer token not provided"
        records_client.get_record.assert_not_called()

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "valid_token", "Bearer a b"])
    def test_get_malformed_authorization(self, client, records_client, header):
        response = client.get("/record/1", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized: Bearer token not provided"
        records_client.get_record.assert_not_called()

    def test_get_lowercase_scheme(self, client, records_client, stored_record):
        records_client.get_record.return_value = GetRecordResponse(record=stored_record)

        response = client.get("/record/1", headers={"Authorization": "bearer valid_token"})

        assert response.status_code == 200

    def test_get_wrong_token(self, client, records_client):
        records_client.get_record.side_effect = RpcError(RpcCode.UNAUTHENTICATED, "Unauthenticated")

        response = client.get("/record/1", headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized: Invalid Bearer token"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("code", [RpcCode.INTERNAL, RpcCode.UNKNOWN])
    def test_get_other_errors_are_500(self, client, records_client, code):
        records_client.get_record.side_effect = RpcError(code, "user not found")

        response = client.get("/record/1", headers=AUTH)

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal Server Error"

    def test_get_non_numeric_id(self, client, records_client):
        response = client.get("/record/abc", headers=AUTH)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid record id"
        records_client.get_record.assert_not_called()

    def test_get_id_with_trailing_newline(self, client, records_client):
        response = client.get("/record/1%0A", headers=AUTH)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid record id"
        records_client.get_record.assert_not_called()

    def test_get_never_returns_token(self, client, records_client, stored_record):
        records_client.get_record.return_value = GetRecordResponse(record=stored_record)

        response = client.get("/record/1", headers=AUTH)

        assert "token" not in response.json()


class TestUpdateRecordRoute:
    """Test cases for PUT /record/{id}."""

    def test_update_success(self, client, records_client, stored_record):
        updated = stored_record.model_copy(update={"first_name": "Calm", "age": 11})
        records_client.update_record.return_value = UpdateRecordResponse(
            record=updated, message="User successfully updated"
        )

        response = client.put("/record/1", json={**BODY, "first_name": "Calm", "age": 11}, headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {
            "record": {"id": 1, "first_name": "Calm", "last_name": "Kid", "age": 11},
            "message": "User successfully updated",
        }
        args = records_client.update_record.await_args.args
        assert args[0] == 1
        assert args[1] == "valid_token"
        assert args[2].first_name == "Calm"

    def test_update_without_authorization(self, client, records_client):
        response = client.put("/record/1", json=BODY)

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized: Bearer token not provided"
        records_client.update_record.assert_not_called()

    def test_update_non_numeric_id(self, client, records_client):
        response = client.put("/record/one", json=BODY, headers=AUTH)

        assert response.status_code == 400
        records_client.update_record.assert_not_called()

    def test_update_bad_json(self, client, records_client):
        response = client.put("/record/1", content=b"[", headers={**AUTH, "Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Error decoding JSON"
        records_client.update_record.assert_not_called()

    def test_update_wrong_token(self, client, records_client):
        records_client.update_record.side_effect = RpcError(RpcCode.UNAUTHENTICATED, "Unauthenticated")

        response = client.put("/record/1", json=BODY, headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized: Invalid Bearer token"

    def test_update_invalid_argument_is_400(self, client, records_client):
        records_client.update_record.side_effect = RpcError(RpcCode.INVALID_ARGUMENT, "Invalid user data")

        response = client.put("/record/1", json={**BODY, "age": 0}, headers=AUTH)

        assert response.status_code == 400

    def test_update_internal_is_500(self, client, records_client):
        records_client.update_record.side_effect = RpcError(RpcCode.INTERNAL, "db down")

        response = client.put("/record/1", json=BODY, headers=AUTH)

        assert response.status_code == 500
