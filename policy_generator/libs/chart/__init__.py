"""
Chart Libraries

Template rendering, chart generation and validation for operator policies.
"""

from .template_engine import TemplateEngine
from .chart_generator import ChartGenerator
from .validator import ChartValidator

__all__ = [
    'TemplateEngine',
    'ChartGenerator',
    'ChartValidator'
]
