"""
Curriculum authoring and progression service.

Courses are composed of ordered lessons by administrators and published;
learners enroll in published courses and complete lessons one by one.
"""

__version__ = "0.1.0"
