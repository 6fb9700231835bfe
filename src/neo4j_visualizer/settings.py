from __future__ import annotations

from pydantic import Field

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except Exception as e:  # pragma: no cover
    raise RuntimeError(
        "pydantic-settings is required. Install with: pip install pydantic-settings"
    ) from e


class VisualizerSettings(BaseSettings):
    """Defaults for the visualizer.

    Environment variables are prefixed with NEO4J_VISUALIZER_.
    """

    model_config = SettingsConfigDict(env_prefix="NEO4J_VISUALIZER_", extra="ignore")

    # --- Core ---
    log_level: str = Field(default="INFO", description="Python logging level")

    # --- Canvas ---
    default_width: int = Field(default=800, gt=0)
    default_height: int = Field(default=600, gt=0)

    # --- Force layout ---
    layout_iterations: int = Field(default=80, ge=0, description="Relaxation steps")
    repulsion: float = Field(default=8000.0, ge=0, description="Inverse-square repulsion constant")
    attraction: float = Field(default=0.03, ge=0, description="Linear edge attraction constant")
    alpha_min: float = Field(default=0.05, gt=0, le=1, description="Floor for the decaying alpha")


settings = VisualizerSettings()
