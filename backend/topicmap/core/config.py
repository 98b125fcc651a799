"""Runtime configuration helpers.

Classes:
    Settings: Pydantic settings model capturing environment-driven defaults.
    SimilarityConfig, ProjectionConfig, LayoutConfig: Frozen per-stage tunables.
    PipelineConfig: Bundle of the per-stage configs handed to the graph pipeline.

Functions:
    get_settings(): Return a cached Settings instance for dependency injection.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any, Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TOPICMAP_",
        extra="ignore",
    )

    app_name: str = "Topic Map API"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    min_topics: int = 2
    similarity_threshold: float = 0.82
    projection_perplexity: float = 15.0
    projection_early_exaggeration: float = 4.0
    projection_learning_rate: float = 10.0
    projection_max_iter: int = 1000
    projection_seed: Optional[int] = 42
    projection_seed_scale: float = 10.0
    projection_jitter: float = 0.5
    layout_alpha: float = 1.5
    layout_alpha_min: float = 0.001
    layout_alpha_decay: float = 0.0228
    layout_alpha_target: float = 0.0
    layout_velocity_decay: float = 0.4
    layout_link_distance: float = 6.0
    layout_link_strength: float = 0.4
    layout_charge_strength: float = -40.0
    layout_distance_min: float = 1.0
    layout_center_strength: float = 1.0
    layout_max_ticks: int = 400
    layout_min_kinetic_energy: float = 0.0


@lru_cache()
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True, slots=True)
class SimilarityConfig:
    threshold: float = 0.82


@dataclass(frozen=True, slots=True)
class ProjectionConfig:
    """t-SNE tunables; ``perplexity`` is clamped to ``N - 1`` at run time.

    ``learning_rate`` is on scikit-learn's gradient scale. Values near 100 overshoot
    for maps of a few tens of topics and scatter related points.
    """

    perplexity: float = 15.0
    early_exaggeration: float = 4.0
    learning_rate: float = 10.0
    max_iter: int = 1000
    seed: Optional[int] = 42
    seed_scale: float = 10.0
    jitter: float = 0.5


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Force simulation tunables.

    ``charge_strength`` is negative for repulsion. ``min_kinetic_energy`` of zero
    disables the energy stop so only ``alpha_min`` and ``max_ticks`` end a run.
    """

    alpha: float = 1.5
    alpha_min: float = 0.001
    alpha_decay: float = 0.0228
    alpha_target: float = 0.0
    velocity_decay: float = 0.4
    link_distance: float = 6.0
    link_strength: float = 0.4
    charge_strength: float = -40.0
    distance_min: float = 1.0
    center_strength: float = 1.0
    max_ticks: int = 400
    min_kinetic_energy: float = 0.0
    seed: Optional[int] = 42


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    min_topics: int = 2

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> "PipelineConfig":
        settings = settings or get_settings()
        config = cls(
            similarity=SimilarityConfig(threshold=settings.similarity_threshold),
            projection=ProjectionConfig(
                perplexity=settings.projection_perplexity,
                early_exaggeration=settings.projection_early_exaggeration,
                learning_rate=settings.projection_learning_rate,
                max_iter=settings.projection_max_iter,
                seed=settings.projection_seed,
                seed_scale=settings.projection_seed_scale,
                jitter=settings.projection_jitter,
            ),
            layout=LayoutConfig(
                alpha=settings.layout_alpha,
                alpha_min=settings.layout_alpha_min,
                alpha_decay=settings.layout_alpha_decay,
                alpha_target=settings.layout_alpha_target,
                velocity_decay=settings.layout_velocity_decay,
                link_distance=settings.layout_link_distance,
                link_strength=settings.layout_link_strength,
                charge_strength=settings.layout_charge_strength,
                distance_min=settings.layout_distance_min,
                center_strength=settings.layout_center_strength,
                max_ticks=settings.layout_max_ticks,
                min_kinetic_energy=settings.layout_min_kinetic_energy,
                seed=settings.projection_seed,
            ),
            min_topics=max(2, settings.min_topics),
        )
        return config.with_overrides(overrides)

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> "PipelineConfig":
        """Apply request-level overrides; ``None`` values keep the configured default."""

        if not overrides:
            return self
        similarity = self.similarity
        projection = self.projection
        layout = self.layout
        threshold = overrides.get("similarity_threshold")
        if threshold is not None:
            similarity = replace(similarity, threshold=float(threshold))
        perplexity = overrides.get("perplexity")
        if perplexity is not None:
            projection = replace(projection, perplexity=float(perplexity))
        max_iter = overrides.get("max_iter")
        if max_iter is not None:
            projection = replace(projection, max_iter=int(max_iter))
        max_ticks = overrides.get("max_ticks")
        if max_ticks is not None:
            layout = replace(layout, max_ticks=int(max_ticks))
        if "seed" in overrides and overrides["seed"] is not None:
            seed = int(overrides["seed"])
            projection = replace(projection, seed=seed)
            layout = replace(layout, seed=seed)
        return replace(self, similarity=similarity, projection=projection, layout=layout)


__all__ = [
    "LayoutConfig",
    "PipelineConfig",
    "ProjectionConfig",
    "Settings",
    "SimilarityConfig",
    "get_settings",
]
