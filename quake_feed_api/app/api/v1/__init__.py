"""
Version 1 of the API.

Breaking changes to the earthquake routes should be introduced in a new
version subpackage to preserve backwards compatibility.
"""
