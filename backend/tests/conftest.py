from collections.abc import AsyncGenerator

import numpy as np
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from topicmap.core.config import PipelineConfig, ProjectionConfig, Settings, get_settings
from topicmap.main import app


@pytest.fixture()
def fully_connected_embeddings() -> np.ndarray:
    gram = np.array(
        [
            [1.0, 0.9, 0.9],
            [0.9, 1.0, 0.9],
            [0.9, 0.9, 1.0],
        ]
    )
    return np.linalg.cholesky(gram)


@pytest.fixture()
def isolated_topic_embeddings() -> np.ndarray:
    return np.array(
        [
            [1.0, 0.05, 0.0, 0.0],
            [0.98, 0.1, 0.02, 0.0],
            [0.95, 0.0, 0.1, 0.0],
            [1.0, 0.08, 0.05, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


@pytest.fixture()
def fast_config() -> PipelineConfig:
    return PipelineConfig(projection=ProjectionConfig(max_iter=250, seed=7))


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(_env_file=None, projection_max_iter=250, projection_seed=7)


@pytest_asyncio.fixture()
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_settings] = lambda: test_settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()
