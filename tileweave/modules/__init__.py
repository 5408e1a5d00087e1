# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Processing Modules
  supplier   tileset image → tile sequence
  edges      tile → four border sequences
  adjacency  border comparison → directional neighbor lists
"""
