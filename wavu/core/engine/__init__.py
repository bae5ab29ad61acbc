"""Engine — the concurrent install pipeline."""
