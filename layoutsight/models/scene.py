"""Scene tree model — the read-only snapshot handed over by the design host."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from layoutsight.models.analysis import Rect


class SceneNode(BaseModel):
    """One node of the host scene graph.

    ``absolute_bounds`` is None for non-drawable nodes. ``type`` keeps the
    host's own tag (``FRAME``, ``GROUP``, ``TEXT``, ``RECTANGLE`` ...).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    type: str = "FRAME"
    visible: bool = True
    absolute_bounds: Rect | None = Field(default=None, alias="absoluteBoundingBox")
    children: list[SceneNode] = Field(default_factory=list)
    characters: str | None = None
    font_size: float | None = Field(default=None, alias="fontSize")
    has_visible_fills: bool = Field(default=False, alias="hasVisibleFills")
    has_visible_strokes: bool = Field(default=False, alias="hasVisibleStrokes")
    has_image_fill: bool = Field(default=False, alias="hasImageFill")

    def walk(self):
        """Depth-first iteration over this node and all descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: str) -> SceneNode | None:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None


SceneNode.model_rebuild()
