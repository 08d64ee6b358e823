"""Feature routers (users, courses, enrollments)."""
