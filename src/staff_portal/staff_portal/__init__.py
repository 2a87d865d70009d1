"""Staff portal package.

Organized by feature modules (staff, attendance, timetable) with a thin Flask
controller layer on top of service and repository layers.
"""
