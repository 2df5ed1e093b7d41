"""
Sample acquisition: extract, repair and store upstream example screens.
"""

from acul_samples.samples.extractor import Sample, extract_samples, select_best_sample
from acul_samples.samples.repairer import repair_sample

__all__ = ["Sample", "extract_samples", "repair_sample", "select_best_sample"]
