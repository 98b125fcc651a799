import numpy as np
import pytest

from topicmap.core.config import PipelineConfig, ProjectionConfig
from topicmap.core.errors import InvalidInputError
from topicmap.services.interaction import InteractionController
from topicmap.services.pipeline import GraphPipeline, prepare_topics


def _raw_topics(count: int) -> list[dict]:
    return [
        {"topic": f"Topic {index}", "importance": 3 + index, "context": f"We talked about topic {index}."}
        for index in range(count)
    ]


def test_fully_connected_scenario(fully_connected_embeddings, fast_config):
    result = GraphPipeline(fast_config).run_payload(_raw_topics(3), fully_connected_embeddings.tolist())
    graph = result.graph
    assert len(graph.edges) == 3
    assert all(len(node.neighbors) == 3 for node in graph.nodes)
    coords = np.array([node.position.as_tuple() for node in graph.nodes])
    assert np.all(np.isfinite(coords))
    assert result.layout_ticks > 0
    assert [stage["name"] for stage in result.timings["stages"]] == ["similarity", "projection", "layout", "assembly"]


def test_isolated_topic_scenario(isolated_topic_embeddings, fast_config):
    result = GraphPipeline(fast_config).run_payload(_raw_topics(5), isolated_topic_embeddings.tolist())
    graph = result.graph
    assert graph.neighbors(4) == frozenset({4})
    assert all(not edge.touches(4) for edge in graph.edges)
    for a in range(5):
        for b in range(5):
            assert (b in graph.neighbors(a)) == (a in graph.neighbors(b))


def test_hover_over_pipeline_graph(fully_connected_embeddings, fast_config):
    graph = GraphPipeline(fast_config).run_payload(_raw_topics(3), fully_connected_embeddings.tolist()).graph
    controller = InteractionController(graph)
    controller.pointer_over(0)
    assert [visual.emphasis for visual in controller.node_visuals()] == ["focus", "related", "related"]


def test_degenerate_embeddings_never_produce_nan(fast_config):
    embeddings = [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.5, 0.5, 0.5], [0.5, 0.5, 0.5]]
    result = GraphPipeline(fast_config).run_payload(_raw_topics(4), embeddings)
    coords = np.array([node.position.as_tuple() for node in result.graph.nodes])
    assert np.all(np.isfinite(coords))
    assert [(edge.source_index, edge.target_index) for edge in result.graph.edges] == [(2, 3)]


def test_identical_embeddings_use_jitter_seed(fast_config):
    embeddings = [[0.2, 0.4]] * 3
    result = GraphPipeline(fast_config).run_payload(_raw_topics(3), embeddings)
    assert result.projection.method == "jitter"
    assert len(result.graph.edges) == 3
    coords = np.array([node.position.as_tuple() for node in result.graph.nodes])
    assert np.all(np.isfinite(coords))


def test_pipeline_is_reproducible_with_seed(isolated_topic_embeddings, fast_config):
    pipeline = GraphPipeline(fast_config)
    first = pipeline.run_payload(_raw_topics(5), isolated_topic_embeddings.tolist()).graph
    second = pipeline.run_payload(_raw_topics(5), isolated_topic_embeddings.tolist()).graph
    for a, b in zip(first.nodes, second.nodes):
        assert np.allclose(a.position.as_tuple(), b.position.as_tuple())


@pytest.mark.parametrize(
    ("topics", "embeddings", "message"),
    [
        (_raw_topics(1), [[1.0, 0.0]], "At least 2 topics"),
        (_raw_topics(3), [[1.0, 0.0], [0.0, 1.0]], "counts must match"),
        (_raw_topics(2), [[1.0, 0.0], []], "is empty"),
        (_raw_topics(2), [[1.0, 0.0], [1.0, 0.0, 0.0]], "share one dimension"),
        (_raw_topics(2), [[1.0, float("nan")], [1.0, 0.0]], "non-finite"),
        ([{"topic": "  ", "importance": 4}, {"topic": "b"}], [[1.0], [0.5]], "no text"),
        ([{"topic": "a", "importance": "high"}, {"topic": "b"}], [[1.0], [0.5]], "non-numeric importance"),
    ],
)
def test_invalid_payloads_fail_fast(topics, embeddings, message):
    with pytest.raises(InvalidInputError, match=message):
        GraphPipeline(PipelineConfig(projection=ProjectionConfig(max_iter=250))).run_payload(topics, embeddings)


def test_prepare_topics_normalises_metadata():
    raw = [
        {"topic": "  Climate\n\tpolicy ", "importance": 14, "context": "Line one\nline two"},
        {"text": "Carbon tax", "importance": None},
        {"topic": "Grid storage", "importance": -3},
    ]
    topics = prepare_topics(raw, [[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    assert topics[0].text == "Climate policy"
    assert topics[0].importance == 10.0
    assert topics[0].context == "Line one line two"
    assert topics[1].text == "Carbon tax"
    assert topics[1].importance == 5.0
    assert topics[1].context == ""
    assert topics[2].importance == 1.0
    assert topics[2].embedding == (1.0, 1.0)
