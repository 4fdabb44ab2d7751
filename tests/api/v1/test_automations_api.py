"""Automation API integration tests."""

from httpx import AsyncClient


REQUEST = "Создай бота, который каждый день в 9:00 присылает новые заявки из Битрикс24 в Телеграм"


async def _interpret(client: AsyncClient, message: str = REQUEST) -> dict:
    response = await client.post("/api/v1/automations/interpret", json={"user_id": 1, "message": message})
    assert response.status_code == 200
    return response.json()


class TestInterpret:
    """Automation interpretation tests."""

    async def test_create_bot(self, client: AsyncClient):
        data = await _interpret(client)
        assert data["intent"]["type"] == "create_bot"
        assert data["intent"]["confidence"] == 0.85
        assert data["intent"]["entities"]["data_source"] == {"integration": "bitrix24", "filters": ["status:new"]}
        assert [s["type"] for s in data["workflow"]["steps"]] == ["fetch_data", "process_data", "send_notification"]
        assert data["workflow"]["trigger"] == {"type": "schedule", "config": {"schedule": "09:00", "frequency": "daily"}}
        assert data["explanation"]

    async def test_unrecognized_request(self, client: AsyncClient):
        data = await _interpret(client, "what is this thing?")
        assert data["intent"]["type"] == "explain_bot"
        assert data["intent"]["confidence"] == 0.3
        assert data["workflow"]["steps"] == []
        assert "Add a data source to make your bot more useful" in data["suggestions"]

    async def test_feedback(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/automations/interpret",
            json={"user_id": 1, "message": REQUEST, "feedback": "нужно больше деталей"},
        )
        assert "Add additional metrics like conversion rate or deal value" in response.json()["suggestions"]


class TestWorkflowCRUD:
    """Confirmed workflow storage tests."""

    async def test_confirm(self, client: AsyncClient):
        workflow = (await _interpret(client))["workflow"]

        response = await client.post("/api/v1/automations", json={"user_id": 1, "workflow": workflow})
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == workflow["id"]
        assert data["workflow"]["steps"] == workflow["steps"]

    async def test_confirm_twice_conflicts(self, client: AsyncClient):
        workflow = (await _interpret(client))["workflow"]
        await client.post("/api/v1/automations", json={"user_id": 1, "workflow": workflow})

        response = await client.post("/api/v1/automations", json={"user_id": 1, "workflow": workflow})
        assert response.status_code == 409

    async def test_list_by_user(self, client: AsyncClient):
        for _ in range(2):
            workflow = (await _interpret(client))["workflow"]
            await client.post("/api/v1/automations", json={"user_id": 1, "workflow": workflow})

        response = await client.get("/api/v1/automations", params={"user_id": 1})
        assert response.json()["total"] == 2

        response = await client.get("/api/v1/automations", params={"user_id": 2})
        assert response.json() == {"workflows": [], "total": 0}

    async def test_get_and_delete(self, client: AsyncClient):
        workflow = (await _interpret(client))["workflow"]
        await client.post("/api/v1/automations", json={"user_id": 1, "workflow": workflow})

        response = await client.get(f"/api/v1/automations/{workflow['id']}")
        assert response.status_code == 200

        response = await client.delete(f"/api/v1/automations/{workflow['id']}")
        assert response.json() == {"success": True, "workflow_id": workflow["id"]}

        response = await client.get(f"/api/v1/automations/{workflow['id']}")
        assert response.status_code == 404

    async def test_delete_missing(self, client: AsyncClient):
        response = await client.delete("/api/v1/automations/bot_missing")
        assert response.status_code == 404
