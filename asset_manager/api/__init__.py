"""
HTTP layer.

Routes and dependencies get configuration injected from the application
state instead of reading the process-wide snapshot directly.
"""
