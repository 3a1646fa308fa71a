"""School Attendance web client.

This package is organized by feature modules (users, classes, students,
attendance) with a thin Flask controller layer over service/repository layers.
Persistence lives in the school backend; repositories here talk to its REST API.
"""
