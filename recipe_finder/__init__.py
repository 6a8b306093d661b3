"""Find recipes for the ingredients you have.

Queries go through a read-through cache: a relational store keyed by the
normalized ingredient list, filled from the Spoonacular API on a miss.

The store is optional. Without it every run fetches.
"""
