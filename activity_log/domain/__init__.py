"""Domain model for user activity logs."""
