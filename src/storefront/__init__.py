"""Storefront — mock e-commerce catalogue, shared cart and checkout."""
