from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Dict, Any

from lxml import etree as ET  # type: ignore

from tree_transfer.core.models import TreeNode

logger = logging.getLogger(__name__)


@dataclass
class PreviewResult:
    """Structured result for preview-oriented operations.

    Attributes
    ----------
    success : bool
        Indicates whether the outline was produced.
    content : Optional[str]
        HTML markup when successful. May be None on failure.
    message : str
        Human-readable outcome message. Clear on failure, brief on success.
    details : Optional[Dict[str, Any]]
        Structured ancillary data (e.g., error kinds).
    """
    success: bool
    content: Optional[str]
    message: str
    details: Optional[Dict[str, Any]] = None


class PreviewService:
    """Renders pane trees as nested HTML outlines.

    The outline is ``<ul><li>root<ul><li>child...</li></ul></li></ul>``. Markup
    is built as lxml elements, so identifiers are escaped on serialization and
    no caller ever assembles HTML strings.

    Examples
    --------
    >>> service = PreviewService()
    >>> service.render_html(TreeNode("(root)", [TreeNode("a")]))
    '<ul><li>(root)<ul><li>a</li></ul></li></ul>'
    """

    def render_outline(self, tree: Optional[TreeNode]) -> PreviewResult:
        """Render ``tree`` as an outline; ``None`` renders as empty content."""
        if tree is None:
            return PreviewResult(success=True, content="", message="Nothing to preview.")
        try:
            ul = ET.Element("ul")
            ul.append(self._build_item(tree))
            html = ET.tostring(ul, encoding="unicode", method="html")
            logger.debug("Preview OK: render_outline root=%s len=%d", tree.id, len(html))
            return PreviewResult(success=True, content=html, message="")
        except (ValueError, TypeError) as exc:
            logger.error("Preview FAIL: render_outline root=%s error=%s", getattr(tree, "id", None), exc)
            return PreviewResult(
                success=False,
                content=None,
                message="Outline rendering failed.",
                details={"reason": "render_error", "error": exc.__class__.__name__},
            )

    def render_html(self, tree: Optional[TreeNode]) -> str:
        """Renderer callable for controllers: markup or "" on failure."""
        result = self.render_outline(tree)
        return result.content or ""

    # -----------------------------
    # Internals
    # -----------------------------

    def _build_item(self, node: TreeNode) -> ET._Element:
        li = ET.Element("li")
        li.text = node.id
        if not node.is_leaf:
            ul = ET.SubElement(li, "ul")
            for child in node.children:
                ul.append(self._build_item(child))
        return li
