"""Topology store, shortest-path engine and command engine."""
