"""Storefront — catalogue, cart, checkout and order history."""
