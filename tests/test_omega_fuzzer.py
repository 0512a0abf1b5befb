import json
import random
import string

import pytest
from httpx import AsyncClient

from conftest import EXEC_URL

# OMEGA FUZZER: every garbage request must still end in an envelope


def generate_garbage(length=100):
    return "".join(random.choices(string.ascii_letters + string.digits + "!@#$%^&*()", k=length))


def generate_injection():
    payloads = ["' OR '1'='1", "'; DROP TABLE sheets--", "<script>alert(1)</script>", "\x00"]
    return random.choice(payloads)


@pytest.mark.asyncio
async def test_omega_query_action_fuzz(async_client: AsyncClient):
    """Random action names and filters never crash the query endpoint."""
    for i in range(60):
        action = generate_garbage(random.randint(0, 80))
        if i % 7 == 0:
            action = generate_injection()
        resp = await async_client.get(
            EXEC_URL, params={"action": action, "employee_id": generate_garbage(20)}
        )
        assert resp.status_code == 200, f"CRITICAL: status {resp.status_code} on {action!r}"
        assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_omega_command_body_fuzz(async_client: AsyncClient):
    """Random bodies never crash the command endpoint."""
    actions = ["login", "checkToken", "addEmployee", "deleteEmployee", "addWorkarea"]
    for i in range(60):
        body = {
            "token": generate_garbage(40),
            "newEmployee": {"id": generate_garbage(10), "hireDate": generate_garbage(12)},
            "area": {"id": generate_injection(), "radius": generate_garbage(5)},
            "employeeId": random.choice([None, 42, generate_garbage(8)]),
            "username": generate_garbage(30),
            "password": generate_garbage(30),
        }
        raw = json.dumps(body) if i % 5 else generate_garbage(50)
        resp = await async_client.post(
            EXEC_URL,
            params={"action": random.choice(actions)},
            content=raw,
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 200, f"CRITICAL: status {resp.status_code} on {raw!r}"
        assert resp.json()["success"] is False
