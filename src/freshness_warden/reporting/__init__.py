"""Console and JSON rendering of freshness views."""
