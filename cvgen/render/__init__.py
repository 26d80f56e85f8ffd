from .renderer import GEN_STATEMENT, TemplateRenderer

__all__ = ["GEN_STATEMENT", "TemplateRenderer"]
