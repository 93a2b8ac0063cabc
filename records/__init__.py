"""Patient records application for the hospital project.

This package contains the patient and account models, the services
that query and mutate them, the route authority gate and the
server-rendered views for the patient workflow.
"""
