"""Layer metadata models."""

from typing import Any

from pydantic import BaseModel, Field


class LayerMetadata(BaseModel):
    """Cache control flags and content metadata of a layer."""

    launch: bool = Field(default=False, description="Include the layer in the runtime image")
    build: bool = Field(default=False, description="Expose the layer to subsequent build steps")
    cache: bool = Field(default=False, description="Persist the layer across builds")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Content metadata compared when reusing a cached layer",
    )

    @property
    def flags(self) -> tuple[bool, bool, bool]:
        """Return (launch, build, cache)."""
        return self.launch, self.build, self.cache
