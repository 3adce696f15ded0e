"""Pairwise bracket voting: immutable ballot state and its transitions."""
