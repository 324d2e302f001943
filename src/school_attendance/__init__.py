"""School Attendance package.

Organized by feature modules (students, assignments, sections, enrollments,
attendance, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
