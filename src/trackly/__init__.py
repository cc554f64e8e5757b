"""TrackLy package.

Student attendance tracking backend organized by feature modules (users,
subjects, schedules, attendance, ...) with a thin Flask controller layer on top
of service/repository layers.
"""
