"""Routing table models."""

from lsrsim.model.routing import RouteEntry, RoutingTable, build_routing_table, first_hop

__all__ = ["RouteEntry", "RoutingTable", "build_routing_table", "first_hop"]
