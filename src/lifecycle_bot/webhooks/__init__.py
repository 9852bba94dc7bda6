"""GitHub webhook receiving and dispatch."""
