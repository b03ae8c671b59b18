"""
Service layer.

Services encapsulate the work behind the API handlers.  The earthquake
client fetches the upstream feed and computes the derived views so the
handlers only translate requests and errors.
"""
