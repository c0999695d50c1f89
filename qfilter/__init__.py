"""
qfilter: parse user-supplied filter query values into sanitized filters
restricted to each entity's queryable fields.
"""
