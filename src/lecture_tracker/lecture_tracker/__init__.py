"""Lecture Tracker package.

Personal attendance tracking organized by feature modules (subjects, lectures,
schedules, tasks, statistics) with a thin Flask controller layer on top of
service and repository layers.
"""
