"""Schema module for Storefront Core.

schema.sql in this package is the source of truth for the data model.
"""
