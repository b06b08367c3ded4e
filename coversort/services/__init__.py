"""Service layer: the phases of a sort run (profile -> rank -> reorder)."""
