# tests/test_concurrency.py
import asyncio

import httpx

API_KEY = "test-secret"


async def _create_task(app, n):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.post(
            "/api/products",
            json={"name": f"Item {n}", "price": n, "category": "bulk", "inStock": True},
            headers={"x-api-key": API_KEY},
        )


async def _create_many(app, count):
    return await asyncio.gather(*(_create_task(app, n) for n in range(count)))


def test_concurrent_creates_get_distinct_ids(app, store):
    results = asyncio.run(_create_many(app, 20))
    assert all(r.status_code == 201 for r in results)
    ids = [r.json()["id"] for r in results]
    assert len(set(ids)) == 20
    assert len(store) == 23
    assert store.statistics()["bulk"] == 20
