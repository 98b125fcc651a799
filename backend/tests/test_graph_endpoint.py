from datetime import datetime

import pytest


def _payload(embeddings, **options):
    topics = [
        {"topic": f"Topic {index}", "importance": 2 + 2 * index, "context": f"Sentence {index}."}
        for index in range(len(embeddings))
    ]
    body = {"topics": topics, "embeddings": embeddings}
    if options:
        body["options"] = options
    return body


@pytest.mark.asyncio
async def test_health_endpoint(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_graph_endpoint_returns_positioned_graph(client, fully_connected_embeddings):
    response = await client.post("/graph", json=_payload(fully_connected_embeddings.tolist()))
    assert response.status_code == 200
    body = response.json()
    assert body["node_count"] == 3
    assert body["edge_count"] == 3
    assert body["similarity_threshold"] == pytest.approx(0.82)
    for node in body["nodes"]:
        assert len(node["position"]) == 3
        assert {"id", "text", "size", "context"} <= node.keys()
    for edge in body["edges"]:
        assert edge["from"] < edge["to"]
        assert edge["similarity"] == pytest.approx(0.9)
    assert body["projection"]["method"] == "tsne"
    assert body["projection"]["params"]["perplexity"] == 2.0
    assert body["layout_ticks"] > 0
    assert [stage["name"] for stage in body["stage_timings"]] == ["similarity", "projection", "layout", "assembly"]
    for stage in body["stage_timings"]:
        started = datetime.fromisoformat(stage["started_at"].replace("Z", "+00:00"))
        finished = datetime.fromisoformat(stage["finished_at"].replace("Z", "+00:00"))
        assert started <= finished


@pytest.mark.asyncio
async def test_graph_endpoint_applies_threshold_override(client, fully_connected_embeddings):
    response = await client.post(
        "/graph",
        json=_payload(fully_connected_embeddings.tolist(), similarity_threshold=0.95, seed=3),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["edge_count"] == 0
    assert body["similarity_threshold"] == pytest.approx(0.95)
    assert body["projection"]["params"]["seed"] == 3


@pytest.mark.asyncio
async def test_graph_endpoint_rejects_single_topic(client):
    response = await client.post("/graph", json=_payload([[1.0, 0.0]]))
    assert response.status_code == 400
    assert "At least 2 topics" in response.json()["detail"]


@pytest.mark.asyncio
async def test_graph_endpoint_rejects_mismatched_lengths(client):
    body = _payload([[1.0, 0.0], [0.0, 1.0]])
    body["embeddings"].append([0.5, 0.5])
    response = await client.post("/graph", json=body)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_graph_endpoint_validates_schema(client):
    response = await client.post("/graph", json={"topics": [{"importance": 3}], "embeddings": [[1.0]]})
    assert response.status_code == 422
