"""Qualified name notations and path queries.

Key Components:
    notation: conversion between bracketed and spaced qualified names
    QueryPath: normalized segment sequence built from a string or a list
    PathQueryEngine: namespace-aware child-axis path resolution
"""

from . import notation
from .path import PathQueryEngine, PathSpec, QueryPath

__all__ = [
    "notation",
    "PathQueryEngine",
    "PathSpec",
    "QueryPath",
]
