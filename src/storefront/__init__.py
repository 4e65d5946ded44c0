"""Storefront: product catalogue, checkout, order tracking and support tickets."""
