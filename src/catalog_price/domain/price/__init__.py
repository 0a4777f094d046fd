"""Price domain package.

The `Price` value object with its tax rate variants, discount types and errors.
"""
