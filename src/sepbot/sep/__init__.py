"""SEP detection, models and staleness analysis."""
