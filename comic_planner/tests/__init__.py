"""Comic planner test suite."""
