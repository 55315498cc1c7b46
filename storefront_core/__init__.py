"""Storefront Core: authentication backend for the storefront API."""
