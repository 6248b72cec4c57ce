"""Song identity normalization and matching.

The identity layer has two distinct concerns:
- Normalization: display form and comparison key for titles and artists
- Matching: bidirectional containment on comparison keys

See: repertorio.core.identity.canonicalize for the pure function API
"""

from .canonicalize import (
    # Display and comparison forms
    normalize,
    display_title,
    comparison_key,
    # Utilities
    has_version_marker,
)
from .matching import (
    is_match,
    match_strength,
    field_strength,
    combine_strengths,
    keys_overlap,
)

__all__ = [
    "normalize",
    "display_title",
    "comparison_key",
    "has_version_marker",
    "is_match",
    "match_strength",
    "field_strength",
    "combine_strengths",
    "keys_overlap",
]
