"""Parcel Desk: recipients, deliveries and contacts behind a JSON API."""

__version__ = "0.1.0"
