from topicmap.core.config import LayoutConfig, PipelineConfig, Settings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("TOPICMAP_SIMILARITY_THRESHOLD", "0.9")
    monkeypatch.setenv("TOPICMAP_LAYOUT_LINK_DISTANCE", "8.5")
    settings = Settings(_env_file=None)
    assert settings.similarity_threshold == 0.9
    assert settings.layout_link_distance == 8.5


def test_pipeline_config_mirrors_settings():
    settings = Settings(_env_file=None, similarity_threshold=0.7, projection_seed=5, layout_max_ticks=50)
    config = PipelineConfig.from_settings(settings)
    assert config.similarity.threshold == 0.7
    assert config.projection.seed == 5
    assert config.layout.seed == 5
    assert config.layout.max_ticks == 50
    assert config.projection.perplexity == 15.0


def test_overrides_replace_only_given_values():
    settings = Settings(_env_file=None)
    config = PipelineConfig.from_settings(
        settings,
        {"similarity_threshold": 0.5, "seed": 11, "max_iter": 300, "perplexity": None},
    )
    assert config.similarity.threshold == 0.5
    assert config.projection.seed == 11
    assert config.layout.seed == 11
    assert config.projection.max_iter == 300
    assert config.projection.perplexity == settings.projection_perplexity
    assert config.layout.link_distance == LayoutConfig().link_distance


def test_min_topics_never_drops_below_two():
    config = PipelineConfig.from_settings(Settings(_env_file=None, min_topics=1))
    assert config.min_topics == 2
