"""L0 Data — constants and the managed tool catalogue."""
