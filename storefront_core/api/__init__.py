"""HTTP helpers shared by Storefront Core blueprints."""
