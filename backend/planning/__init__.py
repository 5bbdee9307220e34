"""Task prioritization, daily scheduling and productivity analysis."""
