"""Graph generation engine.

generate() expands a seed graph, filters nodes and composes edges across the
removed ones. bidir() keeps only edges that agree in both directions.
"""

from graph_builder.core.generate.bidir import bidir, both_directions
from graph_builder.core.generate.generate_graph import generate

__all__ = ["bidir", "both_directions", "generate"]
