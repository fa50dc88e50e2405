"""
Core arithmetic primitives, precision policy and domain models.

Nothing in this package knows which algorithm invokes it.
"""
