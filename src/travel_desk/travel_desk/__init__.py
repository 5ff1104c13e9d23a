"""Travel Desk package.

Organised by feature modules (users, bookings, travel_requests, workflow)
with a thin Flask controller layer over service/repository layers.
"""
