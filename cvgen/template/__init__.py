"""
Template engine for generated conversion code.

Syntax:
  ${a.b}                               value placeholder
  {% for x in a.b %} ... {% endfor %}  loop over a list
  {% if [not] a %} ... {% else %} ... {% endif %}
  {# comment #}
"""

from .errors import LexerError, ParserError, TemplateError, TemplateEvaluationError
from .evaluator import TemplateEvaluator, render_template
from .loader import load_template_source, list_builtin_templates
from .parser import parse_template

__all__ = [
    "LexerError",
    "ParserError",
    "TemplateError",
    "TemplateEvaluationError",
    "TemplateEvaluator",
    "render_template",
    "parse_template",
    "load_template_source",
    "list_builtin_templates",
]
