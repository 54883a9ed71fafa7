"""Nodes for the planner graph."""

from journeyx.planner.nodes.planner import make_generate_node, parse_node

__all__ = ["make_generate_node", "parse_node"]
