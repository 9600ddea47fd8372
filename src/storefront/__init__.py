"""Storefront backend: accounts, catalogue, carts, and orders."""
