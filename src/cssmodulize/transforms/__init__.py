from cssmodulize.transforms.call_sites import (
    CallSiteAction,
    CallSiteMigration,
    CallSiteResult,
    classify_call,
)
from cssmodulize.transforms.style_table import ExtractionResult, StyleTableExtraction

__all__ = [
    "CallSiteAction",
    "CallSiteMigration",
    "CallSiteResult",
    "ExtractionResult",
    "StyleTableExtraction",
    "classify_call",
]
