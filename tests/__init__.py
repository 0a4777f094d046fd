"""
Only the root tests directory carries an __init__.py so pytest treats tests/ as a package.

Subdirectories work as namespace packages (PEP 420) and need no __init__.py.
"""
