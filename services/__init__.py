"""Guna Milan scoring services: koota rules, dosha evaluation, aggregation and profile stores."""
