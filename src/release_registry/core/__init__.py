"""Asset resolution: models, checksum tiers, selection, merge and the
per-release processor."""
