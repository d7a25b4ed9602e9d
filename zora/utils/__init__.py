"""
UTILITIES PACKAGE
=================

Helpers used by the services (no HTTP, no business logic):

  time_info - get_time_information(): current date/time/year strings for the LLM prompt.
"""
