"""Application-related data models."""

from pathlib import Path

from pydantic import BaseModel, Field


class Application(BaseModel):
    """The user's application source tree.

    The pipeline owns the directory; the runner only mutates it. After a
    successful Gradle run ``root`` is a symlink to the application layer.
    """

    root: Path = Field(description="Absolute path to the application directory")

    model_config = {
        "arbitrary_types_allowed": True,
    }

    @property
    def is_symlink(self) -> bool:
        """Return whether the root has been replaced by a symlink."""
        return self.root.is_symlink()
