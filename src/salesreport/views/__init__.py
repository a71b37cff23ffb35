"""Qt views for the report viewer."""
