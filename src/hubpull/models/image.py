"""Image-related models."""

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """A repository returned by the hub search endpoint."""

    model_config = {"frozen": True}

    name: str = Field(description="Repository name, namespaced unless official")
    description: str = Field(default="", description="Short description")
    star_count: int = Field(default=0, description="Number of stars")
    is_official: bool = Field(default=False, description="Whether this is an official image")


class LocalImage(BaseModel):
    """An image present in the local engine."""

    model_config = {"frozen": True}

    reference: str = Field(description="repository:tag, or <none>:<none> when untagged")
    image_id: str = Field(description="Full image ID")
    size: int = Field(default=0, description="Size in bytes")

    @property
    def short_id(self) -> str:
        """Get the 12-character image ID shown by the engine CLI."""
        return self.image_id.replace("sha256:", "")[:12]

    @property
    def size_display(self) -> str:
        """Get a human-readable size."""
        size = float(self.size)
        for unit in ("B", "kB", "MB", "GB"):
            if size < 1000:
                return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
            size /= 1000
        return f"{size:.1f}TB"
