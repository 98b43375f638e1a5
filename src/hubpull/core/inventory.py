"""Local image inventory clean-up."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hubpull.models.image import LocalImage
from hubpull.registry.engine import DockerEngine
from hubpull.utils.logging import get_logger

logger = get_logger(__name__)


class RemovalSelection(BaseModel):
    """Parsed answer to "which images should be removed"."""

    indices: list[int] = Field(default_factory=list, description="Valid 1-based indices")
    skipped: list[str] = Field(default_factory=list, description="Why entries were skipped")


class RemovalReport(BaseModel):
    """Outcome of removing a selection of images."""

    removed: list[LocalImage] = Field(default_factory=list)
    failed: list[LocalImage] = Field(default_factory=list)


def parse_removal_selection(text: str, count: int) -> RemovalSelection:
    """Parse a comma-separated list of image numbers such as ``1, 3,5``.

    Invalid and out-of-range entries are skipped with a reason rather
    than rejecting the whole answer. Duplicates are dropped.

    Args:
        text: User input
        count: Number of images displayed

    Returns:
        Selected indices in input order, plus skip reasons
    """
    selection = RemovalSelection()
    for raw in text.split(","):
        entry = raw.replace(" ", "")
        if not entry:
            continue
        if not entry.isdigit():
            selection.skipped.append(f"Skipping invalid entry: '{entry}'")
            continue
        index = int(entry)
        if index < 1 or index > count:
            selection.skipped.append(f"Skipping out of range: {index} (valid: 1-{count})")
            continue
        if index not in selection.indices:
            selection.indices.append(index)
    return selection


class ImageInventory:
    """Numbered view of local images with removal support.

    Example:
        inventory = ImageInventory(DockerEngine())
        images = inventory.refresh()
        report = inventory.remove(parse_removal_selection("1,3", len(images)).indices)
    """

    def __init__(self, engine: DockerEngine) -> None:
        self._engine = engine
        self._images: list[LocalImage] = []

    @property
    def images(self) -> list[LocalImage]:
        return list(self._images)

    def refresh(self) -> list[LocalImage]:
        """Reload the local image list."""
        self._images = self._engine.list_images()
        return self.images

    def remove(self, indices: list[int]) -> RemovalReport:
        """Remove images by their displayed number.

        Args:
            indices: Valid 1-based indices into the last refreshed list

        Returns:
            Which images were removed and which could not be
        """
        report = RemovalReport()
        for index in indices:
            image = self._images[index - 1]
            logger.debug(f"Removing [{index}] {image.reference} ({image.short_id})")
            if self._engine.remove_image(image.image_id):
                report.removed.append(image)
            else:
                report.failed.append(image)
        return report

    def cleanup(self) -> int:
        """Prune unused data; returns bytes reclaimed."""
        return self._engine.prune()
