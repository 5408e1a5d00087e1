# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Edge Extractor Module
Public API for the border extraction stage.
"""

from tileweave.modules.edges.extractor import (
    EdgeColors,
    extract_all_edges,
    extract_edges,
)

__all__ = [
    "EdgeColors",
    "extract_edges",
    "extract_all_edges",
]
