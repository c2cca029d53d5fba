"""Request assembly, cloning and dispatch."""
