"""Monetary domain package.

Currency definitions with their rounding policy and sub-unit factor.
"""
