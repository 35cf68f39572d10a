"""Clients for the external availability, geocoding and routing services."""
