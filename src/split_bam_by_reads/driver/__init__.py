"""Stream driving and split orchestration."""
