from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..protocols import RendererError
from ..template import TemplateError, load_template_source, parse_template
from ..template.evaluator import TemplateEvaluator

logger = logging.getLogger(__name__)

GEN_STATEMENT = "// Code generated by cvgen. DO NOT EDIT."


class TemplateRenderer:
    """
    Default renderer backed by the cvgen template engine.

    Injects `Header` (license header file contents) and `GenStatement` into
    the template variables. Parsed templates are cached per template id.
    """

    def __init__(
        self,
        *,
        license_header_path: Optional[Path],
        root: Optional[Path] = None,
        gen_statement: str = GEN_STATEMENT,
    ):
        self.license_header_path = license_header_path
        self.root = root
        self.gen_statement = gen_statement
        self._evaluators: Dict[str, TemplateEvaluator] = {}
        self._header: Optional[str] = None

    def render(self, template_id: str, variables: Mapping[str, Any]) -> bytes:
        evaluator = self._evaluator(template_id)
        scope: Dict[str, Any] = dict(variables)
        scope.setdefault("Header", self._read_header())
        scope.setdefault("GenStatement", self.gen_statement)
        try:
            text = evaluator.render(scope)
        except TemplateError as e:
            raise RendererError(f"template '{template_id}': {e}") from e
        return (text.rstrip() + "\n").encode("utf-8")

    def _evaluator(self, template_id: str) -> TemplateEvaluator:
        cached = self._evaluators.get(template_id)
        if cached is not None:
            return cached
        try:
            source = load_template_source(template_id, root=self.root)
            ast = parse_template(source)
        except (OSError, TemplateError) as e:
            raise RendererError(f"template '{template_id}': {e}") from e
        logger.debug("parsed template %s", template_id)
        ev = TemplateEvaluator(ast)
        self._evaluators[template_id] = ev
        return ev

    def _read_header(self) -> str:
        if self._header is not None:
            return self._header
        if self.license_header_path is None:
            self._header = ""
            return self._header
        try:
            text = self.license_header_path.read_text(encoding="utf-8")
        except OSError as e:
            raise RendererError(f"cannot read the license header {self.license_header_path}: {e}") from e
        self._header = text.rstrip()
        return self._header


__all__ = ["TemplateRenderer", "GEN_STATEMENT"]
