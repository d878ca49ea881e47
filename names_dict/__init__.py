"""Password dictionaries built from given names found in Wikipedia biographies."""

__version__ = "0.1.0"

from names_dict.extract import NameExtractor, extract_candidates, split_name_field
from names_dict.histogram import ThresholdHistogram
from names_dict.pipeline import Pipeline, PipelineStats, run_pipeline
from names_dict.variants import VariantExpander

__all__ = [
    "NameExtractor",
    "Pipeline",
    "PipelineStats",
    "ThresholdHistogram",
    "VariantExpander",
    "extract_candidates",
    "run_pipeline",
    "split_name_field",
]
